from fastapi import APIRouter, Depends

from petdesk.dependencies import require_auth
from petdesk.schemas.assistant import AnalysisRequest, AssistantReply, CopyRequest, ShippingAdviceRequest
from petdesk.services import copywriter_service

router = APIRouter(prefix="/assistant", tags=["Assistant"])


@router.post("/description", response_model=AssistantReply)
def write_description(payload: CopyRequest, _auth=Depends(require_auth)):
    text = copywriter_service.generate_product_description(
        payload.product_name,
        payload.category,
        payload.language,
    )
    return AssistantReply(text=text)


@router.post("/analysis", response_model=AssistantReply)
def analyze(payload: AnalysisRequest, _auth=Depends(require_auth)):
    return AssistantReply(text=copywriter_service.analyze_sales_data(payload.sales_summary))


@router.post("/shipping-advice", response_model=AssistantReply)
def shipping_advice(payload: ShippingAdviceRequest, _auth=Depends(require_auth)):
    items = [item.model_dump() for item in payload.items]
    return AssistantReply(text=copywriter_service.get_shipping_advice(items, payload.language))


__all__ = ["router"]
