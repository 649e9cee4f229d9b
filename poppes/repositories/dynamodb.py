"""Amazon DynamoDB backed store (boto3 resource API).

Both tables use a string hash key named ``id``. Listing scans the table and
filters/sorts in process, as the catalogue and order volumes are small.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from poppes.errors import NotFoundError, StoreError
from poppes.records import OrderRecord, ProductRecord, format_datetime, to_decimal
from poppes.repositories.base import (OrderRepository, ProductRepository, matches_search,
                                      newest_first, sort_products)

logger = logging.getLogger(__name__)


def connect_tables(region, products_table, orders_table):
    """Table handles for the configured region."""
    dynamodb = boto3.resource('dynamodb', region_name=region)
    return dynamodb.Table(products_table), dynamodb.Table(orders_table)


class _DynamoTable:

    def __init__(self, table, kind):
        self.table = table
        self.kind = kind

    def _call(self, operation, **kwargs):
        try:
            return getattr(self.table, operation)(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error('DynamoDB %s on %s failed: %s', operation, self.kind, e)
            raise StoreError(f'{self.kind} store unavailable') from e

    def _get_item(self, record_id):
        return self._call('get_item', Key={'id': record_id}).get('Item')

    def _put_new(self, item):
        self._call('put_item', Item=item, ConditionExpression=Attr('id').not_exists())

    def _scan(self):
        items = []
        kwargs = {}
        while True:
            response = self._call('scan', **kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs['ExclusiveStartKey'] = last_key


def _product_item(record):
    item = record.to_dict()
    item['price'] = to_decimal(record.price)
    item['quantity'] = int(record.quantity)
    return item


def _product_record(item):
    return ProductRecord.from_dict(item)


class DynamoProductRepository(_DynamoTable, ProductRepository):

    def __init__(self, table):
        super().__init__(table, 'Product')

    def list(self, in_stock=None, search=None, sort='newest', limit=None):
        products = [_product_record(item) for item in self._scan()]
        if in_stock is not None:
            products = [p for p in products if p.in_stock == in_stock]
        if search:
            products = [p for p in products if matches_search(p, search)]
        products = sort_products(products, sort)
        return products[:limit] if limit else products

    def get(self, product_id):
        item = self._get_item(product_id)
        return _product_record(item) if item else None

    def create(self, record):
        now = datetime.utcnow()
        product = replace(record, id=uuid.uuid4().hex,
                          created_at=record.created_at or now, updated_at=now)
        self._put_new(_product_item(product))
        return product.id

    def update(self, record):
        current = self.get(record.id)
        if current is None:
            raise NotFoundError('Product', record.id)
        product = replace(record, created_at=current.created_at, updated_at=datetime.utcnow())
        self._call('put_item', Item=_product_item(product))

    def delete(self, product_id):
        if self._get_item(product_id) is None:
            raise NotFoundError('Product', product_id)
        self._call('delete_item', Key={'id': product_id})

    def set_in_stock(self, product_id, in_stock):
        current = self.get(product_id)
        if current is None:
            raise NotFoundError('Product', product_id)
        current.in_stock = in_stock
        current.updated_at = datetime.utcnow()
        self._call('put_item', Item=_product_item(current))


def _order_item(record):
    item = record.to_dict()
    item['total'] = to_decimal(record.total)
    return item


class DynamoOrderRepository(_DynamoTable, OrderRepository):

    def __init__(self, table):
        super().__init__(table, 'Order')

    def _all(self):
        return [OrderRecord.from_dict(item) for item in self._scan()]

    def create(self, record):
        if record.submission_token:
            existing = self.find_by_submission_token(record.submission_token)
            if existing is not None:
                return existing.id
        order_id = f"PN{datetime.utcnow().strftime('%Y%m%d%H%M')}{uuid.uuid4().hex[:6].upper()}"
        self._put_new(_order_item(replace(record, id=order_id)))
        return order_id

    def get(self, order_id):
        item = self._get_item(order_id)
        return OrderRecord.from_dict(item) if item else None

    def list_for_user(self, user_id):
        return newest_first(o for o in self._all() if o.user_id == str(user_id))

    def list_all(self, status=None):
        orders = self._all()
        if status:
            orders = [o for o in orders if o.status == status]
        return newest_first(orders)

    def update_status(self, order_id, status):
        current = self.get(order_id)
        if current is None:
            raise NotFoundError('Order', order_id)
        self._call(
            'update_item',
            Key={'id': order_id},
            UpdateExpression='SET #s = :s, updated_at = :u',
            ExpressionAttributeNames={'#s': 'status'},
            ExpressionAttributeValues={':s': status, ':u': format_datetime(datetime.utcnow())}
        )

    def find_by_submission_token(self, token):
        for order in self._all():
            if order.submission_token == token:
                return order
        return None
