from sqlalchemy import Column, Integer, String, Boolean, Text, JSON, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base


PRODUCT_CATEGORIES = [
    "Skincare",
    "Food & Beverage",
    "Personal Care",
    "Cleaning Products",
    "Clothing",
    "Electronics",
    "Other",
]
QUESTION_TYPES = ["text", "select", "multiselect"]
REPORT_STATUSES = ["draft", "pending", "completed"]
USER_ROLES = ["admin", "user"]


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    company = Column(String(200), nullable=True)
    role = Column(String(20), nullable=False, default="user", index=True)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Relationships
    reports = relationship("Report", back_populates="user", cascade="all, delete-orphan")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    category = Column(String(50), nullable=False, index=True)
    brand = Column(String(100), nullable=False, index=True)
    ingredients = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=True)
    certifications = Column(JSON, nullable=True, default=list)
    packaging = Column(String(200), nullable=True)
    sustainability = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Relationships
    questions = relationship(
        "Question",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="Question.order",
    )
    reports = relationship("Report", back_populates="product")


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (UniqueConstraint("product_id", "order", name="uq_question_product_order"),)

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    question_text = Column(String(500), nullable=False)
    answer = Column(Text, nullable=True)
    question_type = Column(String(20), nullable=False, default="text")
    options = Column(JSON, nullable=True, default=list)
    is_required = Column(Boolean, default=False)
    order = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Relationships
    product = relationship("Product", back_populates="questions")


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    summary = Column(Text, nullable=False)
    transparency_score = Column(Integer, nullable=False, index=True)
    analysis = Column(JSON, nullable=False, default=dict)
    answers = Column(JSON, nullable=False, default=dict)
    pdf_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="draft", index=True)
    created_at = Column(DateTime, default=datetime.now, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    # Relationships
    product = relationship("Product", back_populates="reports")
    user = relationship("User", back_populates="reports")
