"""
Role registry - makes sure named roles exist and manages membership.
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import RoleAssignmentException, RoleProvisioningException
from .models import Role, User

logger = logging.getLogger(__name__)

PATIENT_ROLE = "Patient"
DOCTOR_ROLE = "Doctor"


class RoleRegistry:
    """
    Lazily provisions roles and assigns users to them.

    Args:
        db: Database session of the current request
    """
    def __init__(self, db: Session):
        self.db = db

    def get(self, name: str):
        return self.db.query(Role).filter(Role.name == name).first()

    def ensure_role(self, name: str) -> Role:
        """
        Return the role called ``name``, creating it if it does not exist.

        Role creation is committed on its own, so it survives a rollback of
        any registration that triggered it. Losing a creation race to another
        request is not an error.

        Raises:
            RoleProvisioningException: If the role can be neither found nor created
        """
        role = self.get(name)
        if role is not None:
            return role

        logger.info(f"Role '{name}' does not exist. Creating it.")
        try:
            role = Role(name=name)
            self.db.add(role)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            role = self.get(name)
            if role is None:
                logger.error(f"Failed to create role '{name}'")
                raise RoleProvisioningException(name)
            return role
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create role '{name}': {str(e)}")
            raise RoleProvisioningException(name) from e

        logger.info(f"Role '{name}' created successfully.")
        return role

    def assign(self, user: User, name: str) -> None:
        """
        Add ``user`` to the role called ``name`` inside the current transaction.

        Raises:
            RoleAssignmentException: If the role is missing or the membership cannot be stored
        """
        role = self.get(name)
        if role is None:
            raise RoleAssignmentException(f"Failed to assign role: role '{name}' does not exist")
        if role in user.roles:
            raise RoleAssignmentException(f"Failed to assign role: user is already in role '{name}'")
        try:
            user.roles.append(role)
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to add user {user.email} to role {name}: {str(e)}")
            raise RoleAssignmentException() from e

    def roles_for(self, user: User) -> List[str]:
        """Read the user's role names from the store."""
        rows = (
            self.db.query(Role.name)
            .join(Role.users)
            .filter(User.id == user.id)
            .order_by(Role.name)
            .all()
        )
        return [name for (name,) in rows]
