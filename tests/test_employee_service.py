"""Tests for the employee directory service."""

from unittest.mock import ANY
from uuid import uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from conftest import FAKE_HASH, make_employee
from directory_api.events.publisher import EventPublishError
from directory_api.events.schemas import EmployeeCreatedEvent
from directory_api.exceptions import (
    DepartmentNotFoundError,
    EmployeeAlreadyExistsError,
    EmployeeNotFoundError,
    ManagerNotFoundError,
)
from directory_api.models.domain.employee import EmployeeRole, EmployeeStatus
from directory_api.models.dto.employee import EmployeeCreate, EmployeeUpdate
from directory_api.services.employee_service import EmployeeService


@pytest.fixture
def service(session, event_publisher, employee_repo, department_repo, password_service) -> EmployeeService:
    return EmployeeService(
        session,
        event_publisher,
        employee_repo=employee_repo,
        department_repo=department_repo,
        password_service=password_service,
    )


def _create_request(department_id, email: str = "grace@acme.com") -> EmployeeCreate:
    return EmployeeCreate(
        first_name="Grace",
        last_name="Hopper",
        email=email,
        password="correct-horse",
        role=EmployeeRole.MANAGER,
        department_id=department_id,
    )


def _update_request(department_id=None) -> EmployeeUpdate:
    return EmployeeUpdate(
        first_name="Grace",
        last_name="Murray",
        email="grace.murray@acme.com",
        role=EmployeeRole.ADMIN,
        department_id=department_id,
    )


class TestCreateEmployee:
    """Tests for create_employee."""

    @pytest.mark.asyncio
    async def test_duplicate_email_stops_before_any_side_effect(
        self, service, employee_repo, department_repo, password_service, event_publisher, engineering
    ) -> None:
        employee_repo.email_exists.return_value = True

        with pytest.raises(EmployeeAlreadyExistsError) as exc_info:
            await service.create_employee(_create_request(engineering.id))

        assert exc_info.value.message == "Employee with email already exists"
        department_repo.get_by_id.assert_not_awaited()
        password_service.hash_password.assert_not_called()
        employee_repo.create.assert_not_awaited()
        event_publisher.publish_employee_created.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_department_stops_before_hashing(
        self, service, employee_repo, department_repo, password_service, event_publisher
    ) -> None:
        missing_id = uuid4()
        employee_repo.email_exists.return_value = False
        department_repo.get_by_id.return_value = None

        with pytest.raises(DepartmentNotFoundError) as exc_info:
            await service.create_employee(_create_request(missing_id))

        assert exc_info.value.message == f"Department not found with id: {missing_id}"
        password_service.hash_password.assert_not_called()
        employee_repo.create.assert_not_awaited()
        event_publisher.publish_employee_created.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_persists_hash_and_publishes_after_commit(
        self, service, session, employee_repo, department_repo, password_service, event_publisher, engineering
    ) -> None:
        created = make_employee(EmployeeRole.MANAGER, engineering, email="grace@acme.com")
        employee_repo.email_exists.return_value = False
        department_repo.get_by_id.return_value = engineering
        employee_repo.create.return_value = created

        calls: list[str] = []
        session.commit.side_effect = lambda: calls.append("commit")
        event_publisher.publish_employee_created.side_effect = lambda event: calls.append("publish")

        response = await service.create_employee(_create_request(engineering.id))

        password_service.hash_password.assert_called_once_with("correct-horse")
        employee_repo.create.assert_awaited_once_with(
            first_name="Grace",
            last_name="Hopper",
            email="grace@acme.com",
            password_hash=FAKE_HASH,
            role=EmployeeRole.MANAGER,
            status=EmployeeStatus.ACTIVE,
            department_id=engineering.id,
        )
        assert calls == ["commit", "publish"]

        event = event_publisher.publish_employee_created.await_args.args[0]
        assert isinstance(event, EmployeeCreatedEvent)
        assert event.employee_id == created.id
        assert event.email == created.email
        assert (event.first_name, event.last_name) == (created.first_name, created.last_name)

        assert response.id == created.id
        assert response.status == EmployeeStatus.ACTIVE
        assert response.department.id == engineering.id
        assert response.department.name == "Engineering"
        assert "password" not in response.model_dump()
        assert "password_hash" not in response.model_dump()

    @pytest.mark.asyncio
    async def test_publish_failure_still_returns_created_employee(
        self, service, session, employee_repo, department_repo, event_publisher, engineering
    ) -> None:
        created = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.email_exists.return_value = False
        department_repo.get_by_id.return_value = engineering
        employee_repo.create.return_value = created
        event_publisher.publish_employee_created.side_effect = EventPublishError("down")

        response = await service.create_employee(_create_request(engineering.id))

        assert response.id == created.id
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_constraint_violation_maps_to_conflict(
        self, service, session, employee_repo, department_repo, event_publisher, engineering
    ) -> None:
        employee_repo.email_exists.return_value = False
        department_repo.get_by_id.return_value = engineering
        employee_repo.create.side_effect = IntegrityError(
            "INSERT INTO employees", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(EmployeeAlreadyExistsError):
            await service.create_employee(_create_request(engineering.id))

        session.rollback.assert_awaited_once()
        event_publisher.publish_employee_created.assert_not_awaited()


class TestUpdateEmployee:
    """Tests for update_employee."""

    @pytest.mark.asyncio
    async def test_unknown_employee(self, service, employee_repo) -> None:
        employee_repo.get_by_id.return_value = None

        with pytest.raises(EmployeeNotFoundError):
            await service.update_employee(uuid4(), _update_request())

        employee_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_without_department_keeps_current_one(
        self, service, employee_repo, department_repo, engineering
    ) -> None:
        existing = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = existing
        employee_repo.update.return_value = existing

        await service.update_employee(existing.id, _update_request())

        department_repo.get_by_id.assert_not_awaited()
        employee_repo.update.assert_awaited_once_with(
            existing,
            first_name="Grace",
            last_name="Murray",
            email="grace.murray@acme.com",
            role=EmployeeRole.ADMIN,
            updated_at=ANY,
        )

    @pytest.mark.asyncio
    async def test_moving_to_unknown_department(
        self, service, employee_repo, department_repo, engineering
    ) -> None:
        existing = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = existing
        department_repo.get_by_id.return_value = None

        with pytest.raises(DepartmentNotFoundError):
            await service.update_employee(existing.id, _update_request(uuid4()))

        employee_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_moving_to_another_department(
        self, service, employee_repo, department_repo, engineering, sales
    ) -> None:
        existing = make_employee(EmployeeRole.EMPLOYEE, engineering)
        moved = make_employee(EmployeeRole.ADMIN, sales, id=existing.id)
        employee_repo.get_by_id.return_value = existing
        department_repo.get_by_id.return_value = sales
        employee_repo.update.return_value = moved

        response = await service.update_employee(existing.id, _update_request(sales.id))

        assert employee_repo.update.await_args.kwargs["department_id"] == sales.id
        assert response.department.name == "Sales"

    @pytest.mark.asyncio
    async def test_email_uniqueness_is_not_rechecked(
        self, service, employee_repo, engineering
    ) -> None:
        existing = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = existing
        employee_repo.update.return_value = existing

        await service.update_employee(existing.id, _update_request())

        employee_repo.email_exists.assert_not_awaited()


class TestDeleteEmployee:
    """Tests for delete_employee."""

    @pytest.mark.asyncio
    async def test_unknown_employee(self, service, employee_repo) -> None:
        employee_repo.get_by_id.return_value = None

        with pytest.raises(EmployeeNotFoundError):
            await service.delete_employee(uuid4())

        employee_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete(self, service, employee_repo, engineering) -> None:
        existing = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = existing

        await service.delete_employee(existing.id)

        employee_repo.delete.assert_awaited_once_with(existing)


class TestGetEmployee:
    """Tests for get_employee with and without a department-scoped caller."""

    @pytest.mark.asyncio
    async def test_unscoped_lookup(self, service, employee_repo, engineering) -> None:
        target = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = target

        response = await service.get_employee(target.id)

        assert response.id == target.id
        employee_repo.get_by_id_and_department.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unscoped_unknown_id(self, service, employee_repo) -> None:
        missing_id = uuid4()
        employee_repo.get_by_id.return_value = None

        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await service.get_employee(missing_id)

        assert exc_info.value.message == f"Employee not found with id: {missing_id}"

    @pytest.mark.asyncio
    async def test_unknown_manager(self, service, employee_repo) -> None:
        manager_id = uuid4()
        employee_repo.get_by_id.return_value = None

        with pytest.raises(ManagerNotFoundError) as exc_info:
            await service.get_employee(uuid4(), caller_manager_id=manager_id)

        assert exc_info.value.message == f"Manager not found with id: {manager_id}"

    @pytest.mark.asyncio
    async def test_employee_in_managers_department(
        self, service, employee_repo, engineering
    ) -> None:
        manager = make_employee(EmployeeRole.MANAGER, engineering)
        target = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = manager
        employee_repo.get_by_id_and_department.return_value = target

        response = await service.get_employee(target.id, caller_manager_id=manager.id)

        assert response.id == target.id
        employee_repo.get_by_id_and_department.assert_awaited_once_with(target.id, engineering.id)

    @pytest.mark.asyncio
    async def test_employee_outside_managers_department_looks_absent(
        self, service, employee_repo, engineering
    ) -> None:
        manager = make_employee(EmployeeRole.MANAGER, engineering)
        employee_repo.get_by_id.return_value = manager
        employee_repo.get_by_id_and_department.return_value = None

        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await service.get_employee(uuid4(), caller_manager_id=manager.id)

        assert exc_info.value.message == "Employee not found"

    @pytest.mark.asyncio
    async def test_manager_without_department_sees_nobody(self, service, employee_repo) -> None:
        manager = make_employee(EmployeeRole.MANAGER, department=None)
        employee_repo.get_by_id.return_value = manager

        with pytest.raises(EmployeeNotFoundError):
            await service.get_employee(uuid4(), caller_manager_id=manager.id)

        employee_repo.get_by_id_and_department.assert_not_awaited()


class TestListEmployees:
    """Tests for list_employees."""

    @pytest.mark.asyncio
    async def test_unknown_caller(self, service, employee_repo) -> None:
        employee_repo.get_by_id.return_value = None

        with pytest.raises(EmployeeNotFoundError):
            await service.list_employees(uuid4())

    @pytest.mark.asyncio
    async def test_admin_sees_everyone_but_self(
        self, service, employee_repo, engineering, sales
    ) -> None:
        admin = make_employee(EmployeeRole.ADMIN, engineering)
        others = [make_employee(EmployeeRole.EMPLOYEE, engineering), make_employee(EmployeeRole.MANAGER, sales)]
        employee_repo.get_by_id.return_value = admin
        employee_repo.get_all_except.return_value = others

        response = await service.list_employees(admin.id)

        employee_repo.get_all_except.assert_awaited_once_with(admin.id)
        employee_repo.get_by_department_except.assert_not_awaited()
        assert [e.id for e in response] == [e.id for e in others]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [EmployeeRole.MANAGER, EmployeeRole.EMPLOYEE])
    async def test_non_admin_sees_own_department_but_self(
        self, service, employee_repo, engineering, role
    ) -> None:
        caller = make_employee(role, engineering)
        peer = make_employee(EmployeeRole.EMPLOYEE, engineering)
        employee_repo.get_by_id.return_value = caller
        employee_repo.get_by_department_except.return_value = [peer]

        response = await service.list_employees(caller.id)

        employee_repo.get_by_department_except.assert_awaited_once_with(engineering.id, caller.id)
        employee_repo.get_all_except.assert_not_awaited()
        assert [e.id for e in response] == [peer.id]

    @pytest.mark.asyncio
    async def test_non_admin_without_department_gets_empty_list(self, service, employee_repo) -> None:
        caller = make_employee(EmployeeRole.MANAGER, department=None)
        employee_repo.get_by_id.return_value = caller

        assert await service.list_employees(caller.id) == []
        employee_repo.get_all_except.assert_not_awaited()
        employee_repo.get_by_department_except.assert_not_awaited()


class TestGetEmployeeByEmail:
    """Tests for the identity service projection."""

    @pytest.mark.asyncio
    async def test_unknown_email(self, service, employee_repo) -> None:
        employee_repo.get_by_email.return_value = None

        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await service.get_employee_by_email("nobody@acme.com")

        assert exc_info.value.message == "Employee not found with email: nobody@acme.com"

    @pytest.mark.asyncio
    async def test_projection_has_exactly_five_fields(self, service, employee_repo, engineering) -> None:
        employee = make_employee(EmployeeRole.MANAGER, engineering, email="grace@acme.com")
        employee_repo.get_by_email.return_value = employee

        response = await service.get_employee_by_email("grace@acme.com")

        assert response.model_dump() == {
            "id": employee.id,
            "email": "grace@acme.com",
            "password": FAKE_HASH,
            "role": EmployeeRole.MANAGER,
            "status": EmployeeStatus.ACTIVE,
        }

    @pytest.mark.asyncio
    async def test_lookup_uses_stored_email_form(self, service, employee_repo, engineering) -> None:
        employee_repo.get_by_email.return_value = make_employee(
            EmployeeRole.EMPLOYEE, engineering, email="Grace@acme.com"
        )

        await service.get_employee_by_email("Grace@ACME.com")

        employee_repo.get_by_email.assert_awaited_once_with("Grace@acme.com")

    @pytest.mark.asyncio
    async def test_malformed_email_is_not_found(self, service, employee_repo) -> None:
        with pytest.raises(EmployeeNotFoundError) as exc_info:
            await service.get_employee_by_email("not-an-email")

        assert exc_info.value.message == "Employee not found with email: not-an-email"
        employee_repo.get_by_email.assert_not_awaited()


class TestEmployeeCreateValidation:
    """Tests for request-level checks on new employees."""

    def test_email_domain_is_lowercased(self) -> None:
        assert _create_request(uuid4(), email="Grace@ACME.com").email == "Grace@acme.com"

    def test_multibyte_password_over_bcrypt_limit_is_rejected(self) -> None:
        # 40 characters, 80 bytes
        with pytest.raises(ValidationError) as exc_info:
            EmployeeCreate(
                first_name="Grace",
                last_name="Hopper",
                email="grace@acme.com",
                password="é" * 40,
                role=EmployeeRole.EMPLOYEE,
                department_id=uuid4(),
            )

        errors = exc_info.value.errors()
        assert [e["loc"] for e in errors] == [("password",)]
        assert "72 bytes" in errors[0]["msg"]

    def test_password_at_bcrypt_limit_is_accepted(self) -> None:
        request = EmployeeCreate(
            first_name="Grace",
            last_name="Hopper",
            email="grace@acme.com",
            password="é" * 36,
            role=EmployeeRole.EMPLOYEE,
            department_id=uuid4(),
        )

        assert len(request.password.encode("utf-8")) == 72
