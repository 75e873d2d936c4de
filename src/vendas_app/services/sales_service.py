from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError as RecordValidationError

from vendas_client_sdk import ApiSession
from vendas_client_sdk.clients.entities import NEWEST_FIRST
from vendas_client_sdk.exceptions import InvalidResponseError, RemoteError
from vendas_client_sdk.models import Sale, SaleCreate

from ..app.logs import log_json

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Número", "Data", "Cliente", "Vendedor", "Tipo", "Itens", "Total"]


def search_sales(sales: Iterable[Sale], term: str) -> list[Sale]:
    needle = term.strip().lower()
    if not needle:
        return list(sales)
    return [
        sale
        for sale in sales
        if any(needle in (value or "").lower() for value in (sale.number, sale.client_name, sale.seller_name))
    ]


def _csv_row(sale: Sale) -> dict[str, str]:
    created = sale.created_date.strftime("%d/%m/%Y %H:%M") if sale.created_date else ""
    return {
        "Número": sale.number,
        "Data": created,
        "Cliente": sale.client_name,
        "Vendedor": sale.seller_name or "",
        "Tipo": sale.negotiation_type_name,
        "Itens": str(len(sale.items)),
        "Total": f"{sale.total:.2f}",
    }


def export_sales_csv(sales: Iterable[Sale], output_dir: str | Path = ".", now: datetime | None = None) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)
    stamp = (now or datetime.now()).strftime("%Y%m%d")
    path = destination / f"vendas_{stamp}.csv"
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_HEADERS)
        writer.writeheader()
        for sale in sales:
            writer.writerow(_csv_row(sale))
    return path


class SalesService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def create_sale(self, sale: SaleCreate) -> Sale:
        """Persist a finished sale. Store failures propagate and are not retried.

        A 2xx reply that does not hold a sale record is raised as
        InvalidResponseError; the sale may already be stored in that case.
        """
        logger.info("sale_create_attempt", extra={"number": sale.number, "items": len(sale.items)})
        try:
            created = self.session.sales().create(sale)
        except RemoteError as exc:
            logger.warning(
                "sale_create_failure",
                extra={"number": sale.number, "code": exc.code, "status_code": exc.status_code},
            )
            raise
        except (ValueError, RecordValidationError) as exc:
            logger.warning("sale_create_invalid_response", extra={"number": sale.number, "error": str(exc)})
            raise InvalidResponseError(
                code="INVALID_RESPONSE",
                message="Resposta inválida do servidor ao salvar a venda",
                details={"number": sale.number, "error": str(exc)},
                trace_id=None,
                status_code=502,
            ) from exc
        log_json(
            logger,
            {
                "event": "sale_created",
                "sale_id": created.id,
                "number": created.number,
                "seller_id": created.seller_id,
                "total": created.total,
            },
        )
        return created

    def list_sales(self, limit: int | None = None) -> list[Sale]:
        return self.session.sales().list(sort=NEWEST_FIRST, limit=limit)

    def export_csv(self, sales: Iterable[Sale], output_dir: str | Path = ".") -> Path:
        rows = list(sales)
        path = export_sales_csv(rows, output_dir)
        logger.info("sales_exported", extra={"rows": len(rows), "path": str(path)})
        return path
