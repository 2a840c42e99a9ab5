"""Translate front-end quote and order payloads into RapidDeals request bodies."""

from __future__ import annotations

import random
import time
from typing import Any, Mapping, Optional

from freightdesk.modules.freight import (
    calculate_freight_class,
    format_phone_for_carrier,
    to_carrier_time,
    truncate,
)

from .exceptions import QuoteValidationError

SERVICE_LTL = "LTL"
SERVICE_TL = "TL"
SERVICE_FBA = "FBA"

ACCESSORIAL_MAP = {
    "Inside Delivery": "3",
    "Lift-Gate Delivery": "4",
    "Appointment Delivery": "5",
    "Guaranteed Delivery": "6",
    "Room of Choice with Signature": "ROC",
    "White Glove Delivery": "WGD",
    "No Signature Required": "NSR",
}

PACKAGE_TYPE_MAP = {
    "Bag": "1",
    "Box": "2",
    "Carton": "3",
    "Case": "4",
    "Drum": "5",
    "Keg": "6",
    "Reel": "7",
    "Roll": "8",
    "Tote": "9",
    "Tube": "10",
    "Pallet": "11",
    "Piece": "12",
    "Cylinder": "13",
    "Crate": "14",
}
DEFAULT_PACKAGE_TYPE = "11"
PALLET_UNIT_TYPE = "3"

ORIGIN_TIME_FROM = "08:30"
ORIGIN_TIME_TO = "17:30"
MEMO_LIMIT = 30
EXTRA_MEMO_LIMIT = 100
# RapidDeals only ships domestic freight
CARRIER_COUNTRY = "US"


def _int(value: Any, default: int = 0) -> int:
    """Leading-integer parse that tolerates "12.5", "" and None."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return default


def _float(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def address_type(classification: Optional[str]) -> str:
    return "RESIDENTIAL" if classification == "Residential" else "BUSINESS"


def generate_reference_number() -> str:
    return f"REF-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def item_freight_class(item: Mapping[str, Any]) -> str:
    """The declared class, or one derived from the item's density."""
    declared = str(item.get("freightClass") or "").strip()
    if declared:
        return declared
    return calculate_freight_class(
        _float(item.get("weight")),
        _float(item.get("length")),
        _float(item.get("width")),
        _float(item.get("height")),
    )


def build_commodity_list(items: list[Mapping[str, Any]], *, truckload: bool = False) -> list[dict[str, Any]]:
    commodities = []
    for item in items:
        package_type = PACKAGE_TYPE_MAP.get(str(item.get("packageType") or ""), DEFAULT_PACKAGE_TYPE)
        commodity: dict[str, Any] = {
            "commodity": item.get("packageName"),
            "declaredValue": _int(item.get("declaredValue")),
            "handlingUnits": _int(item.get("totalPallet"), 1) if truckload else str(item.get("totalPallet") or ""),
            "quantity": _int(item.get("totalPackage"), 1) or 1,
            "length": _int(item.get("length")),
            "width": _int(item.get("width")),
            "height": _int(item.get("height")),
            "weight": _int(item.get("weight")),
            "packageTypeId": int(package_type) if truckload else package_type,
            "unitTypeId": int(PALLET_UNIT_TYPE) if truckload else PALLET_UNIT_TYPE,
            "isHazmat": 0,
        }
        if not truckload:
            if item.get("nmfc"):
                commodity["nmfcNumber"] = _int(item.get("nmfc"))
            if item.get("sub"):
                commodity["nmfcSub"] = _int(item.get("sub"))
            freight_class = item_freight_class(item)
            if freight_class:
                commodity["aclass"] = freight_class
        commodities.append(commodity)
    return commodities


def pallet_quantity(commodities: list[Mapping[str, Any]]) -> int:
    return sum(_int(commodity.get("handlingUnits")) for commodity in commodities)


def _require(payload: Mapping[str, Any], *fields: str) -> None:
    missing = [name for name in fields if not payload.get(name)]
    if missing:
        raise QuoteValidationError("Missing required fields")


def _origin_fields(origin: Mapping[str, Any], pickup_date: str, origin_type: str) -> dict[str, Any]:
    return {
        "originAddressLine1": origin.get("address_line1"),
        "originCityName": origin.get("city"),
        "originStateCode": origin.get("state"),
        "originZipCode": origin.get("postal_code"),
        "originCountry": CARRIER_COUNTRY,
        "originType": origin_type,
        "originDate": pickup_date,
    }


def build_ltl_body(payload: Mapping[str, Any]) -> dict[str, Any]:
    _require(payload, "originAddress", "destinationAddress", "pickupDate", "packageItems")
    origin = payload["originAddress"]
    destination = payload["destinationAddress"]
    commodities = build_commodity_list(payload["packageItems"])
    specific_ids = ",".join(
        ACCESSORIAL_MAP[name] for name in payload.get("deliveryAccessorials") or [] if name in ACCESSORIAL_MAP
    )
    body = {
        **_origin_fields(origin, payload["pickupDate"], "BUSINESS"),
        "destinationAddressLine1": destination.get("address_line1"),
        "destinationCityName": destination.get("city"),
        "destinationStateCode": destination.get("state"),
        "destinationZipCode": destination.get("postal_code"),
        "destinationCountry": CARRIER_COUNTRY,
        "destinationType": address_type(destination.get("address_classification")),
        "commodityList": commodities,
        "palletQuantity": pallet_quantity(commodities),
        "selectMode": SERVICE_LTL,
        "quoteType": "0",
    }
    if specific_ids:
        body["destinationSpecificIds"] = specific_ids
    return body


def build_tl_body(payload: Mapping[str, Any]) -> dict[str, Any]:
    _require(payload, "originAddress", "destinationAddress", "pickupDate", "packageItems")
    origin = payload["originAddress"]
    destination = payload["destinationAddress"]
    commodities = build_commodity_list(payload["packageItems"], truckload=True)
    return {
        **_origin_fields(origin, payload["pickupDate"], address_type(origin.get("address_classification"))),
        "destinationAddressLine1": destination.get("address_line1"),
        "destinationCityName": destination.get("city"),
        "destinationStateCode": destination.get("state"),
        "destinationZipCode": destination.get("postal_code"),
        "destinationCountry": CARRIER_COUNTRY,
        "destinationType": address_type(destination.get("address_classification")),
        "commodityList": commodities,
        "palletQuantity": str(pallet_quantity(commodities)),
        "selectMode": SERVICE_TL,
    }


def build_fba_body(payload: Mapping[str, Any]) -> dict[str, Any]:
    _require(payload, "originAddress", "destinationWarehouse", "pickupDate", "deliveryDate", "packageItems")
    origin = payload["originAddress"]
    warehouse = payload["destinationWarehouse"]
    commodities = build_commodity_list(payload["packageItems"])
    return {
        **_origin_fields(origin, payload["pickupDate"], "BUSINESS"),
        "destinationAddressLine1": warehouse.get("address_line1") or warehouse.get("address"),
        "destinationCityName": warehouse.get("city"),
        "destinationStateCode": warehouse.get("state"),
        "destinationZipCode": warehouse.get("postal_code") or warehouse.get("postalCode"),
        "destinationCountry": CARRIER_COUNTRY,
        "destinationType": "BUSINESS",
        "deliveryDate": payload["deliveryDate"],
        "destinationLocationName": warehouse.get("name"),
        "destinationLocationCode": warehouse.get("code"),
        "commodityList": commodities,
        "palletQuantity": pallet_quantity(commodities),
        "selectMode": SERVICE_LTL,
        "quoteType": "1",
    }


def order_destination(submission: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    if submission.get("serviceType") == SERVICE_FBA:
        return submission.get("destinationWarehouse")
    return submission.get("destinationAddress")


def build_order_body(request: Mapping[str, Any]) -> dict[str, Any]:
    """Body for POST /shipmentOrder from a confirmed quote.

    ``request`` carries the place-order fields as the client sent them
    (orderId, rateId, carrierSCAC, quoteSubmissionData, contactInfo, memos...).
    """
    submission = request["quoteSubmissionData"]
    contact = request["contactInfo"]
    origin = submission.get("originAddress")
    destination = order_destination(submission)
    if not origin or not destination:
        raise QuoteValidationError("Missing address information from quote submission")

    is_fba = submission.get("serviceType") == SERVICE_FBA
    if is_fba:
        destination_name = destination.get("name")
        destination_type = "BUSINESS"
    else:
        destination_name = (
            destination.get("address_name")
            or contact.get("companyName")
            or contact.get("destinationName")
            or contact.get("name")
        )
        destination_type = address_type(destination.get("address_classification"))

    body: dict[str, Any] = {
        "orderId": request["orderId"],
        "rateId": request["rateId"],
        "carrierSCAC": request["carrierSCAC"],
        "carrierGuarantee": request["carrierGuarantee"],
        "paymentMethod": request.get("paymentMethod") or 0,
        "destinationCityName": destination.get("city") or "",
        "destinationAddressLine1": destination.get("address_line1") or destination.get("address") or "",
        "destinationAddressLine2": None if is_fba else destination.get("address_line2"),
        "destinationCountry": CARRIER_COUNTRY,
        "destinationContactEmail": contact.get("destinationEmail") or contact.get("email"),
        "destinationContactName": contact.get("destinationName") or contact.get("name"),
        "destinationContactPhone": format_phone_for_carrier(contact.get("destinationPhone") or contact.get("phone")),
        "destinationLocationName": destination_name,
        "destinationStateCode": destination.get("state") or "",
        "destinationType": destination_type,
        "destinationZipCode": str(destination.get("postal_code") or destination.get("postalCode") or "").strip(),
        "destinationMemo": truncate(request.get("destinationMemo"), MEMO_LIMIT),
        "destinationExtraMemo": truncate(request.get("deliveryAdditionalMemo"), EXTRA_MEMO_LIMIT),
        "destinationTimeFrom": to_carrier_time(request.get("destinationTimeFrom"), ORIGIN_TIME_FROM),
        "destinationTimeTo": to_carrier_time(request.get("destinationTimeTo"), ORIGIN_TIME_TO),
        "originAddressLine1": origin.get("address_line1"),
        "originAddressLine2": origin.get("address_line2"),
        "originCityName": origin.get("city"),
        "originContactEmail": contact.get("originEmail") or contact.get("email"),
        "originContactName": contact.get("originName") or contact.get("name"),
        "originContactPhone": format_phone_for_carrier(contact.get("originPhone") or contact.get("phone")),
        "originCountry": CARRIER_COUNTRY,
        "originLocationName": (
            origin.get("address_name") or contact.get("companyName") or contact.get("originName") or contact.get("name")
        ),
        "originStateCode": origin.get("state") or "",
        "originType": address_type(origin.get("address_classification")),
        "originZipCode": str(origin.get("postal_code") or "").strip(),
        "originDate": submission.get("pickupDate"),
        "originMemo": truncate(request.get("originMemo"), MEMO_LIMIT),
        "originExtraMemo": truncate(request.get("pickupAdditionalMemo"), EXTRA_MEMO_LIMIT),
        "originTimeFrom": to_carrier_time(request.get("originTimeFrom"), ORIGIN_TIME_FROM),
        "originTimeTo": to_carrier_time(request.get("originTimeTo"), ORIGIN_TIME_TO),
        "palletQuantity": submission.get("palletQuantity") or 1,
        "referenceNumber": request.get("referenceNumber") or generate_reference_number(),
        "customerDump": request.get("customerDump") or 0,
        "bolplNumber": request.get("orderNumber") or request.get("bolplNumber"),
        "declaredValue": request.get("declaredValue"),
        "amzPoId": request.get("amzPoId"),
        "amzRefNumber": request.get("amzRefNumber"),
    }
    return body
