"""Application service: Delete Fiado Receipt use case.

Paid receipts have a ledger entry; they must be reopened first so the
entry goes away with them.
"""

from __future__ import annotations

import logging

from bevpos.application.dto import OperationResult
from bevpos.domain.exceptions import EntityNotFoundError, ValidationError
from bevpos.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteFiadoReceiptHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, receipt_id: str) -> OperationResult:
        with self._uow as uow:
            receipt = uow.fiado_receipts.get_by_id(receipt_id)
            if receipt is None:
                raise EntityNotFoundError(f"Fiado receipt '{receipt_id}' not found")
            if receipt.paid:
                raise ValidationError("Cannot delete a paid receipt; mark it unpaid first")
            uow.fiado_receipts.delete(receipt_id)
            uow.commit()

        logger.info("Deleted fiado receipt %s", receipt_id)
        return OperationResult(ok=True, message=f"Receipt for {receipt.customer_name} deleted")
