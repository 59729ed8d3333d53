import json
import logging
from urllib import error, request
from urllib.parse import quote, urlparse

from petdesk.config import get_settings

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}
_LANGUAGE_NAMES = {"ru": "Russian", "uk": "Ukrainian"}

DESCRIPTION_EMPTY = "Description could not be generated."
DESCRIPTION_FAILED = "Error generating description. Please check API Key."
ANALYSIS_EMPTY = "Analysis unavailable."
ANALYSIS_FAILED = "Analysis failed."
ADVICE_EMPTY = "Advice unavailable."
ADVICE_FAILED = "Could not generate shipping advice."


def language_name(language):
    return _LANGUAGE_NAMES.get(str(language or "").lower(), "Ukrainian")


def build_description_prompt(product_name, category, language):
    return (
        'You are a professional copywriter for a pet store called "my-dog.com.ua".\n'
        "Write a compelling, SEO-friendly product description (approx 50-80 words) for a product.\n\n"
        "Product Name: {}\n"
        "Category: {}\n"
        "Target Language: {}\n\n"
        "Format: Plain text, no markdown. Tone: Friendly, professional, caring about pets."
    ).format(product_name, category, language_name(language))


def build_analysis_prompt(sales_summary):
    return (
        "Analyze the following sales summary for a pet store and provide 3 brief "
        "strategic recommendations (bullet points).\n"
        "Data: {}"
    ).format(sales_summary)


def build_shipping_prompt(items, language):
    items_list = ", ".join(
        "{} x {}".format(item["quantity"], item["product_name"]) for item in items
    )
    return (
        "You are a warehouse logistics expert.\n"
        "Recommend the optimal packaging box size (Small, Medium, Large) and padding material "
        "for shipping these pet products safely.\n"
        "Items: {}\n"
        "Language: {}\n"
        "Keep it short (1-2 sentences)."
    ).format(items_list, language_name(language))


def build_payload(prompt):
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}


def build_endpoint(api_url, model):
    parsed = urlparse(api_url)
    if parsed.scheme.lower() not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise RuntimeError("GEMINI_API_URL must be an absolute HTTP(S) URL")
    return "{}/models/{}:generateContent".format(api_url.rstrip("/"), quote(model, safe="-._"))


def extract_text(response_body):
    candidates = response_body.get("candidates") or []
    if not candidates:
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()


def _raise_http_error(exc):
    body = ""
    try:
        body_bytes = exc.read()
        if body_bytes:
            body = body_bytes.decode("utf-8", errors="replace").strip()
    except (OSError, ValueError):
        body = ""

    if body:
        raise RuntimeError("Gemini API error: HTTP {} {}".format(exc.code, body)) from exc
    raise RuntimeError("Gemini API error: HTTP {}".format(exc.code)) from exc


def generate_text(prompt):
    """Send ``prompt`` to the Gemini generateContent endpoint and return the text."""
    settings = get_settings()
    api_key = (settings.GEMINI_API_KEY or "").strip()
    if not api_key:
        raise RuntimeError("GEMINI_API_KEY is not configured")

    endpoint = build_endpoint(settings.GEMINI_API_URL, settings.GEMINI_MODEL)
    payload = json.dumps(build_payload(prompt)).encode("utf-8")
    req = request.Request(
        endpoint,
        data=payload,
        method="POST",
        headers={
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        },
    )

    try:
        with request.urlopen(req, timeout=settings.GEMINI_TIMEOUT_SECONDS) as response:  # nosec B310
            status_code = response.getcode()
            if status_code < 200 or status_code >= 300:
                raise RuntimeError("Gemini API error: HTTP {}".format(status_code))
            body = json.loads(response.read().decode("utf-8"))
    except error.HTTPError as exc:
        _raise_http_error(exc)
    except error.URLError as exc:
        raise RuntimeError("Gemini API error: {}".format(exc.reason)) from exc
    except ValueError as exc:
        raise RuntimeError("Gemini API returned invalid JSON") from exc

    return extract_text(body)


def try_generate(prompt, label):
    """Generated text, or None when the Gemini call failed (the failure is logged)."""
    try:
        return generate_text(prompt)
    except (RuntimeError, OSError) as exc:
        logger.error("Gemini %s error: %s", label, exc)
        return None


def _generate_or_fallback(prompt, empty_text, failure_text, label):
    text = try_generate(prompt, label)
    if text is None:
        return failure_text
    return text or empty_text


def draft_product_description(product_name, category, language):
    prompt = build_description_prompt(product_name or "Pet Product", category or "General", language)
    return try_generate(prompt, "description")


def generate_product_description(product_name, category, language):
    text = draft_product_description(product_name, category, language)
    if text is None:
        return DESCRIPTION_FAILED
    return text or DESCRIPTION_EMPTY


def analyze_sales_data(sales_summary):
    prompt = build_analysis_prompt(sales_summary)
    return _generate_or_fallback(prompt, ANALYSIS_EMPTY, ANALYSIS_FAILED, "analytics")


def get_shipping_advice(items, language):
    prompt = build_shipping_prompt(items, language)
    return _generate_or_fallback(prompt, ADVICE_EMPTY, ADVICE_FAILED, "shipping")


__all__ = [
    "analyze_sales_data",
    "build_description_prompt",
    "build_endpoint",
    "build_payload",
    "draft_product_description",
    "extract_text",
    "generate_product_description",
    "generate_text",
    "get_shipping_advice",
    "try_generate",
]
