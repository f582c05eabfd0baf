"""Booking router for fare estimates and booking submission."""

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DB_DEPENDENCY, FARE_RESOLVER_DEPENDENCY
from ..core.exceptions import ProblemDetailsException, StorageError
from ..core.observability import metrics_collector
from ..schemas.booking import BookingConfirmation, BookingRequest, FareEstimate
from ..schemas.common import Problem, StatusMessage
from ..services.booking_form import BOOKING_FAILED_MESSAGE, ESTIMATE_FAILED_MESSAGE
from ..services.booking_service import BookingService, confirmation_message
from ..services.fare_service import FareResolver, estimate_fare
from ..services.validation import validate_booking

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/booking", tags=["booking"])


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=StatusMessage(success=False, message=message).model_dump()
    )


@router.post(
    "/estimate",
    response_model=FareEstimate,
    responses={400: {"model": Problem}, 422: {"model": Problem}, 500: {"model": StatusMessage}},
)
async def get_estimate(
    request: BookingRequest,
    resolver: FareResolver = FARE_RESOLVER_DEPENDENCY
) -> JSONResponse:
    """
    Validate the trip details and estimate the fare.

    Contact details are not required for an estimate. The estimate is
    advisory and is not stored.
    """
    validate_booking(request, require_contact=False)

    try:
        estimate = await estimate_fare(request, resolver)

    except StorageError:
        metrics_collector.record_booking_failure("estimate")
        return _failure(ESTIMATE_FAILED_MESSAGE)

    except Exception as e:
        metrics_collector.record_booking_failure("estimate")
        logger.error(
            "Unexpected error in fare estimate",
            extra={"trip_type": request.trip_type, "error": str(e)},
            exc_info=True
        )
        return _failure(ESTIMATE_FAILED_MESSAGE)

    return JSONResponse(status_code=status.HTTP_200_OK, content=estimate.model_dump())


@router.post(
    "/submit",
    response_model=BookingConfirmation,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": Problem}, 422: {"model": Problem}, 500: {"model": StatusMessage}},
)
async def submit_booking(
    request: BookingRequest,
    db: AsyncSession = DB_DEPENDENCY,
    resolver: FareResolver = FARE_RESOLVER_DEPENDENCY
) -> JSONResponse:
    """
    Validate, estimate and store a booking with status ``pending``.

    Validation failures are reported before any route lookup or write.
    """
    booking_service = BookingService(db)

    try:
        booking = await booking_service.submit_booking(request, resolver)

    except StorageError:
        # Already logged by the service
        return _failure(BOOKING_FAILED_MESSAGE)

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in booking submission",
            extra={"trip_type": request.trip_type, "error": str(e)},
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Internal server error") from e

    logger.info(
        "Booking submitted",
        extra={"booking_id": booking.booking_id, "estimated_fare": booking.estimated_fare}
    )

    response_data = BookingConfirmation(
        booking_id=booking.booking_id,
        estimated_fare=booking.estimated_fare,
        status=booking.status,
        message=confirmation_message(booking.booking_id, booking.estimated_fare),
        created_at=booking.created_at,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=response_data.model_dump(mode="json")
    )
