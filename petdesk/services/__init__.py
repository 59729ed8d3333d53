from petdesk.services.copywriter_service import generate_text
from petdesk.services.dashboard_service import global_metrics, period_metrics
from petdesk.services.import_service import apply_import, build_import_preview
from petdesk.services.seed_service import seed_mock_data
from petdesk.services.warehouse_service import build_preview, finalize_receipt

__all__ = [
    "apply_import",
    "build_import_preview",
    "build_preview",
    "finalize_receipt",
    "generate_text",
    "global_metrics",
    "period_metrics",
    "seed_mock_data",
]
