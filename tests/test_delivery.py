from datetime import datetime, timedelta
import pytest
from conftest import shopper_url
from models.order import Order, OrderStatusLog
from app.services import delivery


def _order_for(client, headers):
    client.post(shopper_url('/cart/add'), json={'product_id': '1'}, headers=headers)
    resp = client.post(
        shopper_url('/checkout'),
        json={'address': 'Shop 4, Market Road', 'phone': '9876543210'},
        headers=headers,
    )
    return resp.get_json()['order_id']


@pytest.mark.parametrize('progress, label', [
    (0, 'Order Confirmed'),
    (19, 'Order Confirmed'),
    (20, 'Preparing Your Order'),
    (59, 'Out for Delivery'),
    (79, 'On the Way'),
    (99, 'Almost There'),
    (100, 'Delivered'),
])
def test_status_labels(progress, label):
    assert delivery.delivery_status(progress) == label


def test_progress_is_capped():
    placed = datetime(2026, 1, 1, 10, 0, 0)
    assert delivery.delivery_progress(placed, placed + timedelta(seconds=3), 0.3) == 10
    assert delivery.delivery_progress(placed, placed + timedelta(minutes=5), 0.3) == 100
    assert delivery.delivery_progress(placed, placed - timedelta(seconds=5), 0.3) == 0


def test_remaining_label():
    assert delivery.remaining_label(0, 300) == '5h 0m remaining'
    assert delivery.remaining_label(50, 300) == '2h 30m remaining'
    assert delivery.remaining_label(90, 300) == '30m remaining'
    assert delivery.remaining_label(100, 300) == '0m remaining'


def test_tracking_in_progress(client, app, auth_headers):
    app.config['DELIVERY_TICK_SECONDS'] = 3600
    try:
        order_id = _order_for(client, auth_headers)
        resp = client.get(shopper_url(f'/orders/{order_id}/tracking'), headers=auth_headers)
    finally:
        app.config['DELIVERY_TICK_SECONDS'] = 0.3
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['progress'] == 0
    assert data['status'] == 'Order Confirmed'
    assert data['remaining'] == '5h 0m remaining'
    assert data['order_status'] == 'in_transit'


def test_tracking_completes_once(client, auth_headers):
    order_id = _order_for(client, auth_headers)
    client.post(f'/__orders/{order_id}/age', json={'seconds': 60})
    for _ in range(2):
        data = client.get(shopper_url(f'/orders/{order_id}/tracking'), headers=auth_headers).get_json()['data']
        assert data['progress'] == 100
        assert data['status'] == 'Delivered'
        assert data['order_status'] == 'delivered'
    logs = OrderStatusLog.query.filter_by(order_id=order_id, status='delivered').count()
    assert logs == 1


def test_complete_marks_delivered(client, auth_headers):
    order_id = _order_for(client, auth_headers)
    resp = client.post(shopper_url(f'/orders/{order_id}/complete'), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['data']['status'] == 'delivered'
    order = Order.query.get(order_id)
    assert order.delivered_at is not None


def test_tracking_unknown_order(client, auth_headers):
    assert client.get(shopper_url('/orders/999/tracking'), headers=auth_headers).status_code == 404
