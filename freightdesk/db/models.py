"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from freightdesk.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    company_name = Column(String(255))
    phone = Column(String(50))
    user_type = Column(String(20), nullable=False, default="customer", index=True)
    price_ratio = Column(Float, nullable=False, default=0.0)
    bonus_credit_cents = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))

    balance = relationship("UserBalance", back_populates="user", uselist=False, cascade="all, delete-orphan")
    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    permissions = relationship(
        "RolePermission",
        back_populates="role",
        cascade="all, delete-orphan",
        order_by="RolePermission.menu_key",
    )
    members = relationship("UserRole", back_populates="role", cascade="all, delete-orphan")


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = (UniqueConstraint("role_id", "menu_key", name="uq_role_permissions_role_menu"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_key = Column(String(100), nullable=False)
    menu_title = Column(String(255), nullable=False)
    parent_key = Column(String(100))
    can_view = Column(Boolean, nullable=False, default=True)

    role = relationship("Role", back_populates="permissions")


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="roles")
    role = relationship("Role", back_populates="members")


class UserBalance(Base):
    __tablename__ = "user_balances"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    current_balance_cents = Column(Integer, nullable=False, default=0)
    pending_balance_cents = Column(Integer, nullable=False, default=0)
    credit_limit_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="balance")


class BalanceTransaction(Base):
    __tablename__ = "balance_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    transaction_id = Column(String(32), unique=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id = Column(String(36), index=True)
    order_number = Column(String(100))
    order_account = Column(String(32))
    company_name = Column(String(255))
    user_email = Column(String(255))
    transaction_type = Column(String(20), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    base_amount_cents = Column(Integer)
    currency = Column(String(10), nullable=False, default="USD")
    description = Column(Text)
    payment_method = Column(String(50))
    reference_id = Column(String(100))
    status = Column(String(20), nullable=False, default="completed")
    is_supervisor_transaction = Column(Boolean, nullable=False, default=False, index=True)
    details = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class Address(Base):
    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    address_name = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=False)
    company_name = Column(String(255))
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255))
    city = Column(String(100), nullable=False)
    state = Column(String(50))
    postal_code = Column(String(20), nullable=False)
    country = Column(String(2), nullable=False, default="US")
    address_type = Column(String(20), nullable=False, default="both")
    address_classification = Column(String(20), nullable=False, default="Unknown")
    is_default = Column(Boolean, nullable=False, default=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class PaymentConfig(Base):
    __tablename__ = "payment_configs"
    __table_args__ = (UniqueConstraint("country", "payment_method", name="uq_payment_configs_country_method"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    admin_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    country = Column(String(2), nullable=False, index=True)
    payment_method = Column(String(50), nullable=False)
    account_name = Column(String(255), nullable=False)
    account_number = Column(String(100), nullable=False)
    bank_name = Column(String(255))
    routing_number = Column(String(50))
    swift_code = Column(String(50))
    additional_info = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class TopUpRequest(Base):
    __tablename__ = "top_up_requests"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_config_id = Column(String(36), ForeignKey("payment_configs.id"), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    approved_amount_cents = Column(Integer)
    currency = Column(String(10), nullable=False, default="USD")
    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_reference = Column(String(255))
    customer_notes = Column(Text)
    payment_details = Column(JSON)
    admin_notes = Column(Text)
    reviewed_by = Column(String(36), ForeignKey("users.id"))
    reviewed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    order_number = Column(String(100), nullable=False, index=True)
    quote_number = Column(String(100))
    rate_id = Column(String(100))
    reference_number = Column(String(100))
    carrier_name = Column(String(255))
    carrier_scac = Column(String(20))
    carrier_guarantee = Column(String(255))
    service_type = Column(String(20), nullable=False, default="LTL")
    total_amount_cents = Column(Integer, nullable=False, default=0)
    base_amount_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    status = Column(String(30), nullable=False, default="pending_review", index=True)
    status_history = Column(JSON)
    origin = Column(JSON)
    destination = Column(JSON)
    contact = Column(JSON)
    pickup_date = Column(Date)
    estimated_delivery_date = Column(Date)
    tracking_number = Column(String(100))
    pro_number = Column(String(100))
    audit_remark = Column(Text)
    refund_status = Column(String(20))
    refunded_at = Column(DateTime(timezone=True))
    carrier_response = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    description = Column(String(255))
    package_type = Column(String(50))
    quantity = Column(Integer, nullable=False, default=1)
    weight = Column(Float, nullable=False, default=0.0)
    total_weight = Column(Float, nullable=False, default=0.0)
    length = Column(Float)
    width = Column(Float)
    height = Column(Float)
    freight_class = Column(String(10))
    nmfc = Column(String(50))
    is_stackable = Column(Boolean, nullable=False, default=False)
    is_hazardous = Column(Boolean, nullable=False, default=False)

    order = relationship("Order", back_populates="items")
