"""
Order Store - CSV-backed persistence for submitted orders.

Keeps three tables next to each other (customers, orders, order_items)
and reads/writes them with pandas. Line items are stored exactly as the
engine finalized them; the order total is the exact sum of item costs.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from ..engine.models import Customer, ItemType, LineItem

logger = logging.getLogger(__name__)


@dataclass
class OrderRecord:
    """A persisted order header."""
    id: int
    order_date: str
    customer_id: int
    total_cost: float


@dataclass
class OrderSummary(OrderRecord):
    """Order header joined with the customer's name, for order lists."""
    customer_name: str = ""


@dataclass
class OrderItemRecord:
    """A persisted line item."""
    id: int
    order_id: int
    item: LineItem


@dataclass
class OrderDetails:
    """Everything an invoice needs: header, customer and items."""
    order: OrderRecord
    customer: Customer
    items: list[OrderItemRecord] = field(default_factory=list)


@dataclass
class TailoringItem:
    """What the stitching department needs per curtain item."""
    design_code: str
    length_cm: float
    quantity: int


class OrderStore:
    """Persists orders, their customers and their line items."""

    CUSTOMER_COLUMNS = ['id', 'name', 'phone', 'address']
    ORDER_COLUMNS = ['id', 'order_date', 'customer_id', 'total_cost']
    ITEM_COLUMNS = [
        'id', 'order_id', 'fabric_id', 'design_code', 'fabric_name', 'item_type',
        'length_cm', 'quantity', 'cost', 'fabric_used_m',
    ]
    TEXT_COLUMNS = ['name', 'phone', 'address', 'order_date', 'design_code', 'fabric_name', 'item_type']

    def __init__(self, customers_csv: Path, orders_csv: Path, order_items_csv: Path):
        self.customers_csv = Path(customers_csv)
        self.orders_csv = Path(orders_csv)
        self.order_items_csv = Path(order_items_csv)

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------
    def _read(self, path: Path, columns: list[str]) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame(columns=columns)
        dtypes = {c: str for c in columns if c in self.TEXT_COLUMNS}
        return pd.read_csv(path, dtype=dtypes, keep_default_na=False)

    def _write(self, df: pd.DataFrame, path: Path, columns: list[str]):
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, columns=columns, index=False)

    @staticmethod
    def _append(df: pd.DataFrame, rows: list[dict]) -> pd.DataFrame:
        new = pd.DataFrame(rows)
        if df.empty:
            return new
        return pd.concat([df, new], ignore_index=True)

    @staticmethod
    def _next_id(df: pd.DataFrame) -> int:
        if df.empty:
            return 1
        return int(df['id'].max()) + 1

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _resolve_customer(self, customers: pd.DataFrame, customer: Customer) -> tuple[pd.DataFrame, int]:
        """Reuse a customer with the same name and phone, otherwise add one."""
        name = customer.name.strip()
        phone = (customer.phone or '').strip()

        if not customers.empty:
            match = customers[
                (customers['name'].str.strip() == name) &
                (customers['phone'].str.strip() == phone)
            ]
            if not match.empty:
                return customers, int(match.iloc[0]['id'])

        customer_id = self._next_id(customers)
        row = {
            'id': customer_id,
            'name': name,
            'phone': phone,
            'address': (customer.address or '').strip(),
        }
        return self._append(customers, [row]), customer_id

    def add_order(
        self,
        customer: Customer,
        items: Sequence[LineItem],
        order_date: Optional[str] = None,
    ) -> int:
        """
        Persist a customer's order and return the generated order id.

        Raises:
            ValueError: no customer name or no items
        """
        if not (customer.name or '').strip():
            raise ValueError("Customer name is required")
        if not items:
            raise ValueError("Order has no items")

        customers = self._read(self.customers_csv, self.CUSTOMER_COLUMNS)
        orders = self._read(self.orders_csv, self.ORDER_COLUMNS)
        order_items = self._read(self.order_items_csv, self.ITEM_COLUMNS)

        customers, customer_id = self._resolve_customer(customers, customer)

        order_id = self._next_id(orders)
        total = sum((item.cost for item in items), 0.0)
        orders = self._append(orders, [{
            'id': order_id,
            'order_date': order_date or date.today().isoformat(),
            'customer_id': customer_id,
            'total_cost': total,
        }])

        first_item_id = self._next_id(order_items)
        rows = []
        for offset, item in enumerate(items):
            row = item.to_dict()
            row['id'] = first_item_id + offset
            row['order_id'] = order_id
            rows.append(row)
        order_items = self._append(order_items, rows)

        self._write(customers, self.customers_csv, self.CUSTOMER_COLUMNS)
        self._write(orders, self.orders_csv, self.ORDER_COLUMNS)
        self._write(order_items, self.order_items_csv, self.ITEM_COLUMNS)

        logger.info("Saved order %d for customer %d: %d item(s), total %.2f",
                    order_id, customer_id, len(items), total)
        return order_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @staticmethod
    def _order_from_row(row) -> OrderRecord:
        return OrderRecord(
            id=int(row['id']),
            order_date=str(row['order_date']),
            customer_id=int(row['customer_id']),
            total_cost=float(row['total_cost']),
        )

    @staticmethod
    def _item_from_row(row) -> OrderItemRecord:
        return OrderItemRecord(
            id=int(row['id']),
            order_id=int(row['order_id']),
            item=LineItem(
                fabric_id=int(row['fabric_id']),
                fabric_name=str(row['fabric_name']),
                design_code=str(row['design_code']),
                item_type=ItemType(row['item_type']),
                length_cm=float(row['length_cm']),
                quantity=int(row['quantity']),
                fabric_used_m=float(row['fabric_used_m']),
                cost=float(row['cost']),
            ),
        )

    def list_orders(self) -> list[OrderSummary]:
        """All orders with customer names, newest first."""
        orders = self._read(self.orders_csv, self.ORDER_COLUMNS)
        if orders.empty:
            return []
        customers = self._read(self.customers_csv, self.CUSTOMER_COLUMNS)

        merged = orders.merge(
            customers[['id', 'name']].rename(columns={'id': 'customer_id', 'name': 'customer_name'}),
            on='customer_id',
            how='left',
        ).sort_values('id', ascending=False)

        summaries = []
        for _, row in merged.iterrows():
            header = self._order_from_row(row)
            name = row['customer_name']
            summaries.append(OrderSummary(
                **header.__dict__,
                customer_name=name if isinstance(name, str) else "",
            ))
        return summaries

    def get_order_details(self, order_id) -> OrderDetails:
        """
        Full detail of one order.

        Raises:
            ValueError: order not found
        """
        orders = self._read(self.orders_csv, self.ORDER_COLUMNS)
        match = orders[orders['id'] == int(order_id)] if not orders.empty else orders
        if match.empty:
            raise ValueError(f"Order '{order_id}' not found")
        order = self._order_from_row(match.iloc[0])

        customers = self._read(self.customers_csv, self.CUSTOMER_COLUMNS)
        customer_match = customers[customers['id'] == order.customer_id] if not customers.empty else customers
        if customer_match.empty:
            customer = Customer(id=order.customer_id)
        else:
            c = customer_match.iloc[0]
            customer = Customer(name=c['name'], phone=c['phone'], address=c['address'], id=int(c['id']))

        order_items = self._read(self.order_items_csv, self.ITEM_COLUMNS)
        if not order_items.empty:
            order_items = order_items[order_items['order_id'] == order.id].sort_values('id')
        items = [self._item_from_row(row) for _, row in order_items.iterrows()]

        return OrderDetails(order=order, customer=customer, items=items)

    def get_tailoring_items(self, order_id) -> list[TailoringItem]:
        """Curtain items of an order, as listed on the stitching sheet."""
        details = self.get_order_details(order_id)
        return [
            TailoringItem(
                design_code=record.item.design_code,
                length_cm=record.item.length_cm,
                quantity=record.item.quantity,
            )
            for record in details.items
            if record.item.item_type is ItemType.CURTAIN
        ]

    def export(self, path: Path) -> Path:
        """
        Export every order line with its order and customer to .csv or .xlsx.

        Raises:
            ValueError: unsupported file extension
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in ('.csv', '.xlsx'):
            raise ValueError(f"Unsupported export format: {path.suffix or path.name}")

        orders = self._read(self.orders_csv, self.ORDER_COLUMNS)
        customers = self._read(self.customers_csv, self.CUSTOMER_COLUMNS)
        order_items = self._read(self.order_items_csv, self.ITEM_COLUMNS)

        report = (
            order_items.rename(columns={'id': 'item_id'})
            .merge(orders.rename(columns={'id': 'order_id'}), on='order_id', how='left')
            .merge(
                customers.rename(columns={'id': 'customer_id', 'name': 'customer_name',
                                          'phone': 'customer_phone', 'address': 'customer_address'}),
                on='customer_id',
                how='left',
            )
        )
        columns = [
            'order_id', 'order_date', 'customer_name', 'customer_phone', 'customer_address',
            'item_id', 'design_code', 'fabric_name', 'item_type', 'length_cm', 'quantity',
            'fabric_used_m', 'cost', 'total_cost',
        ]
        report = report.reindex(columns=columns).sort_values(['order_id', 'item_id'])

        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix == '.xlsx':
            report.to_excel(path, index=False, sheet_name='Orders', engine='openpyxl')
        else:
            report.to_csv(path, index=False)

        logger.info("Exported %d order line(s) to %s", len(report), path)
        return path
