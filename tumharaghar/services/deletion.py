"""
Deletion flow for the seller dashboard.

A delete goes Idle -> ConfirmPending -> Deleting -> Idle. The listing is only
dropped from the dashboard after the database confirms the row was removed.
"""

import enum
import logging
import uuid
from typing import Awaitable, Callable, Optional

from tumharaghar.schemas.pages import Notification
from tumharaghar.utils.exceptions import APIException

logger = logging.getLogger(__name__)


class DeletionState(str, enum.Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    DELETING = "deleting"


class DeletionFlowError(Exception):
    """Raised when an event arrives in a state that does not accept it."""


class DeletionFlow:
    """
    State machine for deleting one listing at a time.

    The HTTP layer carries ConfirmPending between requests in a signed
    confirmation token and rebuilds the flow from it.
    """

    def __init__(self):
        self.state = DeletionState.IDLE
        self.pending_id: Optional[uuid.UUID] = None

    @classmethod
    def pending(cls, property_id: uuid.UUID) -> "DeletionFlow":
        """Flow already awaiting confirmation for property_id."""
        flow = cls()
        flow.request(property_id)
        return flow

    def request(self, property_id: uuid.UUID) -> None:
        if self.state == DeletionState.DELETING:
            raise DeletionFlowError("A delete is already in progress")
        self.state = DeletionState.CONFIRM_PENDING
        self.pending_id = property_id

    def cancel(self) -> None:
        if self.state != DeletionState.CONFIRM_PENDING:
            raise DeletionFlowError("No delete is awaiting confirmation")
        self.state = DeletionState.IDLE
        self.pending_id = None

    async def confirm(self, delete: Callable[[uuid.UUID], Awaitable[None]]) -> Notification:
        """
        Run the delete for the pending listing.

        Args:
            delete: Coroutine function deleting one listing; raises on failure

        Returns:
            Success or error notification; the flow is back in Idle either way
        """
        if self.state != DeletionState.CONFIRM_PENDING or self.pending_id is None:
            raise DeletionFlowError("No delete is awaiting confirmation")

        property_id = self.pending_id
        self.state = DeletionState.DELETING
        try:
            await delete(property_id)
        except APIException as e:
            logger.warning(f"Delete of property {property_id} failed: {e.detail}")
            return Notification.error("Error", "Failed to delete property.")
        else:
            return Notification.success("Success", "Property deleted successfully.")
        finally:
            self.state = DeletionState.IDLE
            self.pending_id = None
