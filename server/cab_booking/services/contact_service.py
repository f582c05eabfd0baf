"""Contact service for storing contact-form messages."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import StorageError
from ..core.observability import metrics_collector
from ..models.contact import ContactMessage
from ..schemas.contact import ContactRequest

logger = logging.getLogger(__name__)


class ContactService:
    """Service for contact messages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_message(self, request: ContactRequest) -> ContactMessage:
        """
        Store one contact message.

        Duplicate submissions are stored as separate messages.

        Raises:
            StorageError: If the write fails
        """
        contact = ContactMessage(
            name=request.name,
            email=request.email,
            phone=request.phone,
            subject=request.subject,
            message=request.message,
        )

        try:
            self.db.add(contact)
            await self.db.commit()
            await self.db.refresh(contact)
        except SQLAlchemyError as e:
            await self.db.rollback()
            metrics_collector.record_contact("failed")
            logger.error(
                "Error saving contact",
                extra={"email": request.email, "subject": request.subject, "error": str(e)},
                exc_info=True
            )
            raise StorageError(detail="Contact message could not be stored", operation="contacts/insert") from e

        metrics_collector.record_contact("stored")
        logger.info(
            "Contact message stored",
            extra={"contact_id": str(contact.id), "subject": contact.subject}
        )
        return contact
