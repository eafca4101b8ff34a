# =============================================================================
# app/routers/reports.py - Financial Report Endpoints
# =============================================================================
# Admin-only aggregate report and CSV download of every transaction.
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.auth import AdminUser
from app.config import settings
from core.models.report import FinancialReport
from core.services.report_service import ReportService, csv_filename

router = APIRouter()


@router.get("", response_model=FinancialReport)
def get_report(user: AdminUser):
    """
    Get the financial summary.

    Returns the current balance, total income, total expense and the
    income/expense of every month that has transactions, oldest first.
    """
    return ReportService.build_report()


@router.get(
    "/csv",
    responses={200: {"content": {"text/csv": {}}, "description": "CSV file of all transactions"}},
)
def download_csv(user: AdminUser):
    """
    Download all transactions as CSV.

    Columns: ID, Concepto, Monto, Tipo, Fecha, Usuario, Email.
    Newest transactions first.
    """
    content = ReportService.export_csv()
    filename = csv_filename(settings.CSV_FILENAME_PREFIX)

    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        },
    )
