#!/usr/bin/env python
"""Seed the first department and ADMIN employee.

The directory only admits callers that already exist as employees, so a fresh
database needs one admin created out of band.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from directory_api.database import engine, session_scope
from directory_api.models.domain.employee import EmployeeRole, EmployeeStatus
from directory_api.models.dto.employee import BCRYPT_MAX_PASSWORD_BYTES, normalize_email
from directory_api.repositories.department_repository import DepartmentRepository
from directory_api.repositories.employee_repository import EmployeeRepository
from directory_api.security.password import get_password_service


async def create_admin(
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    department_name: str,
) -> bool:
    """Create an admin employee, creating the department if needed."""
    if len(password) < 8 or len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        print(f"Password must be 8 characters to {BCRYPT_MAX_PASSWORD_BYTES} bytes long")
        return False

    try:
        email = normalize_email(email)
    except ValueError:
        print(f"Invalid email address: {email}")
        return False

    async with session_scope() as session:
        employee_repo = EmployeeRepository(session)
        department_repo = DepartmentRepository(session)

        if await employee_repo.email_exists(email):
            print(f"Employee {email} already exists")
            return False

        department = await department_repo.get_by_name(department_name)
        if department is None:
            department = await department_repo.create(name=department_name)
            print(f"Department created: {department_name}")

        employee = await employee_repo.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=get_password_service().hash_password(password),
            role=EmployeeRole.ADMIN,
            status=EmployeeStatus.ACTIVE,
            department_id=department.id,
        )

    print(f"Admin employee created: {email} ({employee.id})")
    await engine.dispose()
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin employee")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password (8 characters to 72 bytes)")
    parser.add_argument("--first-name", default="Admin", help="First name")
    parser.add_argument("--last-name", default="User", help="Last name")
    parser.add_argument("--department", default="Administration", help="Department name")
    args = parser.parse_args()

    created = asyncio.run(
        create_admin(args.email, args.password, args.first_name, args.last_name, args.department)
    )
    sys.exit(0 if created else 1)
