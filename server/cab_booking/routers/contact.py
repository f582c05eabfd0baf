"""Contact router for the site's contact form."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DB_DEPENDENCY
from ..core.exceptions import StorageError
from ..schemas.common import Problem
from ..schemas.contact import ContactRequest, ContactResponse
from ..services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])

CONTACT_SUCCESS_MESSAGE = "Message sent successfully! We will respond promptly."
CONTACT_FAILURE_MESSAGE = "Failed to send message. Please try again."


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": Problem}, 500: {"model": ContactResponse}},
)
async def submit_contact(
    request: ContactRequest,
    db: AsyncSession = DB_DEPENDENCY
) -> JSONResponse:
    """
    Store a contact-form message.

    Not idempotent: resubmitting stores the message again.
    """
    contact_service = ContactService(db)

    try:
        await contact_service.create_message(request)

    except StorageError:
        # Already logged by the service
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ContactResponse(success=False, message=CONTACT_FAILURE_MESSAGE).model_dump()
        )

    except Exception as e:
        logger.error(
            "Unexpected error saving contact",
            extra={"email": request.email, "error": str(e)},
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ContactResponse(success=False, message=CONTACT_FAILURE_MESSAGE).model_dump()
        )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ContactResponse(success=True, message=CONTACT_SUCCESS_MESSAGE).model_dump()
    )
