"""Declarative models shared by the SQLAlchemy metadata tests."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
  pass


class Customer(Base):
  __tablename__ = 'customers'
  __dn_exclude__ = ('email',)

  id: Mapped[int] = mapped_column(primary_key=True)
  name: Mapped[str] = mapped_column(String(80))
  email: Mapped[Optional[str]] = mapped_column(String(120))
  orders: Mapped[List['Order']] = relationship(back_populates='customer')


class Order(Base):
  __tablename__ = 'orders'

  id: Mapped[int] = mapped_column(primary_key=True)
  created_at: Mapped[datetime] = mapped_column(DateTime)
  total: Mapped[float] = mapped_column(Numeric(10, 2))
  note: Mapped[Optional[str]] = mapped_column(Text)
  customer_id: Mapped[int] = mapped_column(ForeignKey('customers.id'))
  customer: Mapped[Customer] = relationship(back_populates='orders')
  lines: Mapped[List['OrderLine']] = relationship(back_populates='order')


class OrderLine(Base):
  __tablename__ = 'order_lines'
  __dn_table__ = 'line'

  id: Mapped[int] = mapped_column(primary_key=True)
  quantity: Mapped[int]
  order_id: Mapped[int] = mapped_column(ForeignKey('orders.id'))
  order: Mapped[Order] = relationship(back_populates='lines')
