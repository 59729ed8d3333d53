import csv
import logging
from pathlib import Path

from openpyxl import load_workbook
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.constants import DEFAULT_PRODUCT_IMAGE, IMPORT_FIELDS
from petdesk.models.product import Product
from petdesk.services.product_service import find_by_sku

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".csv")

_ALIAS_SPECS = (
    (("sku",), "sku"),
    (("article",), "sku"),
    (("code",), "sku"),
    (("name", "ru"), "name_ru"),
    (("name",), "name_ru"),
    (("title",), "name_ru"),
    (("name", "uk"), "name_uk"),
    (("name", "ua"), "name_uk"),
    (("price",), "price"),
    (("sale", "price"), "price"),
    (("stock",), "stock"),
    (("qty",), "stock"),
    (("quantity",), "stock"),
    (("category",), "category"),
)

HEADER_ALIASES = {"".join(parts): target for parts, target in _ALIAS_SPECS}
_PLACEHOLDER_VALUES = {"none", "null", "na", "n/a", "nan", "-", "--"}


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_text(value):
    if _is_blank(value):
        return None
    text = str(value).strip()
    if text.lower() in _PLACEHOLDER_VALUES:
        return None
    return text


def normalize_header(value):
    if value is None:
        return ""
    value_text = str(value).strip().lower()
    if not value_text:
        return ""
    for char in (" ", "-", ".", "/"):
        value_text = value_text.replace(char, "_")
    value_text = "_".join(part for part in value_text.split("_") if part)
    return HEADER_ALIASES.get(value_text.replace("_", ""), value_text)


def suggest_mapping(headers):
    """Map each importable field to the first file column whose header matches it."""
    mapping = {}
    for header in headers:
        target = normalize_header(header)
        if target in IMPORT_FIELDS and target not in mapping:
            mapping[target] = header
    return mapping


def to_float(value, field):
    if _is_blank(value):
        raise ValueError(f"{field} is required")
    if isinstance(value, str):
        value = value.replace(",", ".").replace(" ", "")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number") from None


def to_int(value, field):
    number = to_float(value, field)
    if not number.is_integer():
        raise ValueError(f"{field} must be an integer")
    return int(number)


def _read_xlsx(path, sheet=None):
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        worksheet = workbook[sheet] if sheet else workbook[workbook.sheetnames[0]]
        rows_iter = worksheet.iter_rows(values_only=True)
        headers = next(rows_iter, None)
        if not headers:
            return [], []
        headers = ["" if header is None else str(header).strip() for header in headers]
        rows = []
        for row in rows_iter:
            if row is None or all(_is_blank(value) for value in row):
                continue
            rows.append({headers[idx]: row[idx] for idx in range(min(len(headers), len(row))) if headers[idx]})
        return [header for header in headers if header], rows
    finally:
        workbook.close()


def _read_csv(path):
    with open(path, newline="", encoding="utf-8-sig") as handle:
        sample = handle.read(4096)
        handle.seek(0)
        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
        except csv.Error:
            dialect = csv.excel
        reader = csv.DictReader(handle, dialect=dialect)
        headers = [header.strip() for header in (reader.fieldnames or []) if header and header.strip()]
        rows = []
        for record in reader:
            row = {(key or "").strip(): value for key, value in record.items() if key}
            if all(_is_blank(value) for value in row.values()):
                continue
            rows.append(row)
        return headers, rows


def read_product_file(path, sheet=None):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError("Only .xlsx and .csv files are supported.")
    if suffix == ".xlsx":
        return _read_xlsx(path, sheet=sheet)
    return _read_csv(path)


def _check_ranges(values):
    for field in ("price", "stock"):
        if values.get(field) is not None and values[field] < 0:
            raise ValueError(f"{field} must not be negative")


def parse_row(row, mapping):
    values = {}
    for field in IMPORT_FIELDS:
        column = mapping.get(field)
        if not column:
            continue
        raw = row.get(column)
        if field == "price":
            values[field] = to_float(raw, field)
        elif field == "stock":
            values[field] = to_int(raw, field)
        else:
            text = _clean_text(raw)
            if text is not None:
                values[field] = text
    if not values.get("sku"):
        raise ValueError("sku is required")
    _check_ranges(values)
    return values


def _describe_changes(existing: Product, values: dict) -> list[str]:
    changes = []
    if "price" in values and values["price"] != existing.price:
        changes.append("Price: {} -> {}".format(existing.price, values["price"]))
    if "stock" in values and values["stock"] != existing.stock:
        changes.append("Stock: {} -> {}".format(existing.stock, values["stock"]))
    for field, label in (("name_ru", "Name RU"), ("name_uk", "Name UK"), ("category", "Category")):
        if field in values and values[field] != getattr(existing, field):
            changes.append("{}: {} -> {}".format(label, getattr(existing, field), values[field]))
    return changes


def build_import_preview(db: Session, path, mapping=None, sheet=None) -> dict:
    headers, rows = read_product_file(path, sheet=sheet)
    mapping = dict(mapping or suggest_mapping(headers))
    unknown = sorted(column for column in mapping.values() if column not in headers)
    if unknown:
        raise ValueError("Mapped columns not found in file: {}".format(", ".join(unknown)))
    if "sku" not in mapping:
        raise ValueError("A column must be mapped to sku.")

    preview_rows = []
    errors = []
    for line_no, row in enumerate(rows, start=2):
        try:
            values = parse_row(row, mapping)
        except ValueError as exc:
            errors.append("row {}: {}".format(line_no, exc))
            continue
        existing = find_by_sku(db, values["sku"])
        if existing is not None:
            preview_rows.append(
                {
                    "type": "update",
                    "sku": values["sku"],
                    "product_id": existing.id,
                    "values": values,
                    "changes": _describe_changes(existing, values),
                    "selected": True,
                }
            )
        else:
            preview_rows.append(
                {
                    "type": "new",
                    "sku": values["sku"],
                    "product_id": None,
                    "values": values,
                    "changes": [],
                    "selected": True,
                }
            )

    logger.info("Import preview for %s: %d rows, %d errors", path, len(preview_rows), len(errors))
    return {"headers": headers, "mapping": mapping, "rows": preview_rows, "errors": errors}


def apply_import(db: Session, rows) -> dict:
    stats = {"inserted": 0, "updated": 0, "skipped": 0}
    try:
        for row in rows:
            if not row.get("selected", True):
                stats["skipped"] += 1
                continue
            values = {
                key: value for key, value in row["values"].items() if key in IMPORT_FIELDS and value is not None
            }
            _check_ranges(values)
            existing = find_by_sku(db, values.get("sku") or row["sku"])
            if existing is not None:
                for key, value in values.items():
                    setattr(existing, key, value)
                stats["updated"] += 1
                continue
            values.setdefault("sku", row["sku"])
            values.setdefault("name_ru", values.get("name_uk") or values["sku"])
            values.setdefault("name_uk", values["name_ru"])
            db.add(
                Product(
                    purchase_price=0.0,
                    image_url=DEFAULT_PRODUCT_IMAGE,
                    **values,
                )
            )
            db.flush()
            stats["inserted"] += 1
        db.commit()
    except (ValueError, SQLAlchemyError):
        db.rollback()
        raise
    logger.info(
        "Product import applied: %d inserted, %d updated, %d skipped",
        stats["inserted"],
        stats["updated"],
        stats["skipped"],
    )
    return stats


__all__ = [
    "apply_import",
    "build_import_preview",
    "normalize_header",
    "parse_row",
    "read_product_file",
    "suggest_mapping",
]
