"""
Billing router - API endpoints for billing records.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from app.core.dependencies import get_billing_service, require_admin, require_task_service
from app.schemas.billing import BillingCreate, BillingRead, BillingUpdate, InvoiceRequest
from app.services.billing_service import BillingService

router = APIRouter(prefix="/billings", tags=["billings"])


@router.get("", response_model=List[BillingRead])
async def list_billings(service: BillingService = Depends(get_billing_service)):
    """List billing records."""
    return await service.list_billings()


@router.post("", response_model=BillingRead, status_code=status.HTTP_201_CREATED)
async def create_billing(
    data: BillingCreate,
    service: BillingService = Depends(get_billing_service),
):
    """Create a billing record."""
    return await service.create_billing(data)


@router.post(
    "/for-task",
    response_model=BillingRead,
    dependencies=[Depends(require_task_service)],
)
async def create_billing_for_task(
    data: InvoiceRequest,
    service: BillingService = Depends(get_billing_service),
):
    """Invoice a completed task; the amount is priced at the fixed hourly rate."""
    return await service.issue_for_task(data)


@router.get("/{billing_id}", response_model=BillingRead)
async def get_billing(
    billing_id: UUID,
    service: BillingService = Depends(get_billing_service),
):
    """Get a billing record by ID."""
    return await service.get_billing(billing_id)


@router.put("/{billing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_billing(
    billing_id: UUID,
    data: BillingUpdate,
    service: BillingService = Depends(get_billing_service),
):
    """Replace a billing record's fields."""
    await service.update_billing(billing_id, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def remove_all_billings(service: BillingService = Depends(get_billing_service)):
    """Remove every billing record (admin only)."""
    await service.remove_all_billings()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{billing_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def remove_billing(
    billing_id: UUID,
    service: BillingService = Depends(get_billing_service),
):
    """Remove a billing record (admin only)."""
    await service.remove_billing(billing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
