"""Pydantic schemas used across the project."""
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def money(cents: Optional[int]) -> Optional[float]:
    """Cents as a two-decimal dollar amount for JSON responses."""
    if cents is None:
        return None
    return round(cents / 100, 2)


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys the web client uses."""

    model_config = ConfigDict(populate_by_name=True)


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


# ── auth / users ──


class RegisterRequest(CamelModel):
    email: str
    password: str
    full_name: str = Field(..., alias="fullName")
    company_name: Optional[str] = Field(None, alias="companyName")
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    user_type: str
    price_ratio: float = 0.0
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class RegisterResponse(BaseModel):
    message: str = "Registration successful"
    user: UserResponse


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    token: str
    password: str


class ProfileUpdate(CamelModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    company_name: Optional[str] = Field(None, alias="companyName")
    phone: Optional[str] = None


class PasswordChangeRequest(CamelModel):
    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword")


class PermissionsResponse(BaseModel):
    permissions: list[str]
    roles: list[str]
    user_type: str


# ── roles ──


class PermissionSchema(BaseModel):
    menu_key: str
    menu_title: str
    parent_key: Optional[str] = None
    can_view: bool = True

    model_config = ConfigDict(from_attributes=True)


class RoleCreate(BaseModel):
    name: str
    description: Optional[str] = None
    permissions: list[PermissionSchema] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    permissions: Optional[list[PermissionSchema]] = None


class RoleResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    permissions: list[PermissionSchema] = Field(default_factory=list)
    user_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ── balances ──


class BalanceSummary(BaseModel):
    current_balance: float
    pending_balance: float
    available_balance: float
    credit_limit: float
    currency: str
    updated_at: Optional[datetime] = None


class TransactionResponse(BaseModel):
    id: str
    transaction_id: str
    user_id: str
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    order_account: Optional[str] = None
    company_name: Optional[str] = None
    user_email: Optional[str] = None
    transaction_type: str
    amount: float
    base_amount: Optional[float] = None
    currency: str
    description: Optional[str] = None
    payment_method: Optional[str] = None
    reference_id: Optional[str] = None
    status: str
    is_supervisor_transaction: bool
    created_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    success: bool = True
    transactions: list[TransactionResponse]
    total: int
    balance: BalanceSummary


class TransactionCreate(BaseModel):
    amount: float
    transaction_type: str
    description: Optional[str] = None
    payment_method: Optional[str] = None
    reference_id: Optional[str] = None
    order_id: Optional[str] = None
    order_number: Optional[str] = None
    base_amount: Optional[float] = None
    create_dual_transaction: bool = False


class TransactionCreateResponse(BaseModel):
    success: bool = True
    transactions: list[TransactionResponse]


# ── customers ──


class CustomerCreate(CamelModel):
    email: str
    password: str
    full_name: str = Field(..., alias="fullName")
    company_name: Optional[str] = Field(None, alias="companyName")
    phone: Optional[str] = None
    price_ratio: float = Field(0.0, alias="priceRatio")
    bonus_credit: float = Field(0.0, alias="bonusCredit")
    role_id: Optional[str] = Field(None, alias="roleId")


class CustomerUpdate(CamelModel):
    email: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    company_name: Optional[str] = Field(None, alias="companyName")
    phone: Optional[str] = None
    price_ratio: Optional[float] = Field(None, alias="priceRatio")
    bonus_credit: Optional[float] = Field(None, alias="bonusCredit")
    role_id: Optional[str] = Field(None, alias="roleId")
    is_active: Optional[bool] = Field(None, alias="isActive")


class CustomerResponse(BaseModel):
    id: str
    email: str
    full_name: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    price_ratio: float
    bonus_credit: float
    is_active: bool
    role_id: Optional[str] = None
    balance: Optional[BalanceSummary] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


# ── addresses ──


class AddressFields(BaseModel):
    address_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    company_name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    address_type: Optional[str] = None
    address_classification: Optional[str] = None
    is_default: Optional[bool] = None
    notes: Optional[str] = None


class AddressResponse(BaseModel):
    id: str
    user_id: str
    address_name: str
    contact_name: str
    contact_phone: str
    contact_email: str
    company_name: Optional[str] = None
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: Optional[str] = None
    postal_code: str
    country: str
    address_type: str
    address_classification: str
    is_default: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AddressValidateRequest(BaseModel):
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: str = "US"


class AddressValidationResponse(CamelModel):
    success: bool
    validated: bool
    classification: str
    matched_address: Optional[dict[str, Any]] = Field(None, alias="matchedAddress")
    original_address: dict[str, Any] = Field(default_factory=dict, alias="originalAddress")
    errors: list[str] = Field(default_factory=list)


# ── payment configs ──


class PaymentConfigFields(BaseModel):
    country: Optional[str] = None
    payment_method: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    additional_info: Optional[str] = None
    is_active: Optional[bool] = None


class PaymentConfigResponse(BaseModel):
    id: str
    admin_id: str
    country: str
    payment_method: str
    account_name: str
    account_number: str
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    additional_info: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CountryResponse(BaseModel):
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


# ── top-ups ──


class TopUpSubmitRequest(BaseModel):
    payment_config_id: str
    amount: float
    currency: str = "USD"
    payment_reference: Optional[str] = None
    customer_notes: Optional[str] = None
    payment_details: Optional[dict[str, Any]] = None


class TopUpResponse(BaseModel):
    id: str
    user_id: str
    payment_config_id: str
    amount: float
    approved_amount: Optional[float] = None
    currency: str
    status: str
    payment_reference: Optional[str] = None
    customer_notes: Optional[str] = None
    payment_details: Optional[dict[str, Any]] = None
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    company_name: Optional[str] = None
    payment_method: Optional[str] = None
    payment_country: Optional[str] = None


class TopUpListResponse(BaseModel):
    success: bool = True
    requests: list[TopUpResponse]


class TopUpReviewRequest(BaseModel):
    request_id: str
    action: str
    notes: Optional[str] = None
    amount: Optional[float] = None


class ClearTopUpsResponse(BaseModel):
    success: bool = True
    deleted_count: int


# ── quotes ──


class QuoteRequest(CamelModel):
    """Shared body for LTL, TL and FBA quote submissions."""

    origin_address: Optional[dict[str, Any]] = Field(None, alias="originAddress")
    destination_address: Optional[dict[str, Any]] = Field(None, alias="destinationAddress")
    destination_warehouse: Optional[dict[str, Any]] = Field(None, alias="destinationWarehouse")
    pickup_date: Optional[str] = Field(None, alias="pickupDate")
    delivery_date: Optional[str] = Field(None, alias="deliveryDate")
    delivery_accessorials: list[str] = Field(default_factory=list, alias="deliveryAccessorials")
    package_items: list[dict[str, Any]] = Field(default_factory=list, alias="packageItems")


class QuoteSubmitResponse(CamelModel):
    success: bool = True
    quote_number: str = Field(..., alias="quoteNumber")
    order_id: str = Field(..., alias="orderId")
    message: Optional[str] = None


class TLQuoteResponse(CamelModel):
    success: bool = True
    order_id: str = Field(..., alias="orderId")
    initial_rates: list[dict[str, Any]] = Field(default_factory=list, alias="initialRates")
    message: Optional[str] = None
    is_tl: bool = Field(True, alias="isTL")


class QuoteResultsRequest(CamelModel):
    quote_order_id: str = Field(..., alias="quoteOrderId")
    poll: bool = False


class QuoteResultsData(CamelModel):
    order_id: str = Field(..., alias="orderId")
    rates: list[dict[str, Any]]


class QuoteResultsResponse(BaseModel):
    success: bool = True
    data: QuoteResultsData


class EstimateItem(BaseModel):
    weight: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


class EstimateRequest(CamelModel):
    items: list[EstimateItem] = Field(default_factory=list)
    pickup_date: Optional[date] = Field(None, alias="pickupDate")
    carrier_guarantee: Optional[str] = Field(None, alias="carrierGuarantee")
    transit_days: Optional[int] = Field(None, alias="transitDays", ge=0)


class ItemEstimateResponse(CamelModel):
    index: int
    density: Optional[float] = None
    freight_class: str = Field(..., alias="freightClass")


class EstimateResponse(CamelModel):
    items: list[ItemEstimateResponse]
    transit_days: int = Field(..., alias="transitDays")
    estimated_delivery_date: Optional[date] = Field(None, alias="estimatedDeliveryDate")


# ── orders ──


class PlaceOrderRequest(CamelModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    order_id: Optional[str] = Field(None, alias="orderId")
    rate_id: Optional[str] = Field(None, alias="rateId")
    carrier_scac: Optional[str] = Field(None, alias="carrierSCAC")
    carrier_guarantee: Optional[str] = Field(None, alias="carrierGuarantee")
    customer_dump: Optional[int] = Field(None, alias="customerDump")
    quote_submission_data: Optional[dict[str, Any]] = Field(None, alias="quoteSubmissionData")
    contact_info: Optional[dict[str, Any]] = Field(None, alias="contactInfo")
    selected_quote_data: Optional[dict[str, Any]] = Field(None, alias="selectedQuoteData")
    payment_method: Optional[int] = Field(None, alias="paymentMethod")
    declared_value: Optional[float] = Field(None, alias="declaredValue")
    reference_number: Optional[str] = Field(None, alias="referenceNumber")
    order_number: Optional[str] = Field(None, alias="orderNumber")
    bolpl_number: Optional[str] = Field(None, alias="bolplNumber")
    origin_memo: Optional[str] = Field(None, alias="originMemo")
    destination_memo: Optional[str] = Field(None, alias="destinationMemo")
    pickup_additional_memo: Optional[str] = Field(None, alias="pickupAdditionalMemo")
    delivery_additional_memo: Optional[str] = Field(None, alias="deliveryAdditionalMemo")
    origin_time_from: Optional[str] = Field(None, alias="originTimeFrom")
    origin_time_to: Optional[str] = Field(None, alias="originTimeTo")
    destination_time_from: Optional[str] = Field(None, alias="destinationTimeFrom")
    destination_time_to: Optional[str] = Field(None, alias="destinationTimeTo")
    amz_po_id: Optional[str] = Field(None, alias="amzPoId")
    amz_ref_number: Optional[str] = Field(None, alias="amzRefNumber")


class PlaceOrderResponse(CamelModel):
    success: bool = True
    message: str
    order_id: str = Field(..., alias="orderId")
    db_order_id: str = Field(..., alias="dbOrderId")


class OrderItemResponse(BaseModel):
    id: str
    position: int
    description: Optional[str] = None
    package_type: Optional[str] = None
    quantity: int
    weight: float
    total_weight: float
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    freight_class: Optional[str] = None
    nmfc: Optional[str] = None
    is_stackable: bool = False
    is_hazardous: bool = False

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: str
    user_id: str
    order_number: str
    quote_number: Optional[str] = None
    rate_id: Optional[str] = None
    reference_number: Optional[str] = None
    carrier_name: Optional[str] = None
    carrier_scac: Optional[str] = None
    carrier_guarantee: Optional[str] = None
    service_type: str
    total_amount: float
    base_amount: Optional[float] = None
    currency: str
    status: str
    status_history: list[dict[str, Any]] = Field(default_factory=list)
    origin: Optional[dict[str, Any]] = None
    destination: Optional[dict[str, Any]] = None
    contact: Optional[dict[str, Any]] = None
    pickup_date: Optional[date] = None
    estimated_delivery_date: Optional[date] = None
    tracking_number: Optional[str] = None
    pro_number: Optional[str] = None
    audit_remark: Optional[str] = None
    refund_status: Optional[str] = None
    refunded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: list[OrderItemResponse] = Field(default_factory=list)


class OrderListResponse(BaseModel):
    success: bool = True
    orders: list[OrderResponse]
    total: int


class OrderActionRequest(BaseModel):
    reason: Optional[str] = None


class OrderActionResponse(BaseModel):
    success: bool = True
    message: str
    order: Optional[OrderResponse] = None


class RefundInfo(BaseModel):
    created: bool
    amount: float
    description: str


class OrderSyncResponse(CamelModel):
    success: bool = True
    order: OrderResponse
    refund: Optional[RefundInfo] = None
    api_response: dict[str, Any] = Field(default_factory=dict, alias="apiResponse")


# ── insurance ──


class InsuranceQuoteRequest(BaseModel):
    """RapidDeals insured-amount fields, passed through as sent."""

    model_config = ConfigDict(extra="allow")


class InsuranceQuoteData(CamelModel):
    insurance_amount: str = Field(..., alias="insuranceAmount")
    base_insurance_amount: str = Field(..., alias="baseInsuranceAmount")
    compensation_ceiling: Optional[Any] = Field(None, alias="compensationCeiling")
    price_ratio: float = Field(..., alias="priceRatio")


class InsuranceQuoteResponse(BaseModel):
    success: bool = True
    data: InsuranceQuoteData


# ── admin ──


class ResetSystemResponse(CamelModel):
    success: bool = True
    message: str = "System reset completed successfully"
    operations: list[str]
    reset_by: str = Field(..., alias="resetBy")
    reset_at: datetime = Field(..., alias="resetAt")
