from datetime import datetime
from conftest import shopper_url, SHOPPER_PHONE
from models import db
from app.services import profits
from app.services.storage import LocalStore


def _store(raw):
    LocalStore(SHOPPER_PHONE).set_raw(profits.PROFIT_KEY, raw)
    db.session.commit()


def test_empty_history_uses_sample_series(client, auth_headers):
    data = client.get(shopper_url('/profits'), headers=auth_headers).get_json()['data']
    assert data['total_profit'] == 0
    assert data['order_count'] == 0
    assert data['sample'] is True
    assert data['profit_series'] == profits.SAMPLE_SERIES
    assert data['top_margin_items'][0]['id'] == '15'
    assert data['top_margin_items'][0]['bar_percent'] == 100.0
    assert len(data['top_margin_items']) == 10
    assert data['expiring_items']


def test_malformed_history_reads_as_empty(client, auth_headers):
    _store('{not json')
    assert profits.load_records(SHOPPER_PHONE) == []
    _store('{"profit": 5}')
    assert profits.load_records(SHOPPER_PHONE) == []
    resp = client.get(shopper_url('/profits/records'), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['data'] == []


def test_emi_this_month_matches_year_and_month():
    now = datetime(2026, 3, 15)
    records = [
        {'profit': 10, 'emi': 100, 'date': '2026-03-02T10:00:00Z'},
        {'profit': 20, 'emi': 50, 'date': '2025-03-02T10:00:00Z'},
        {'profit': 30, 'emi': 0, 'date': '2026-03-05T10:00:00Z'},
        {'profit': 40, 'emi': 70, 'date': 'garbage'},
    ]
    assert profits.emi_this_month(records, now) == 100
    assert profits.total_profit(records) == 100


def test_orders_feed_the_dashboard(client, auth_headers):
    for pid in ('1', '2'):
        client.post(shopper_url('/cart/add'), json={'product_id': pid}, headers=auth_headers)
        client.post(
            shopper_url('/checkout'),
            json={'address': 'Market Road', 'phone': '9876543210'},
            headers=auth_headers,
        )
    data = client.get(shopper_url('/profits'), headers=auth_headers).get_json()['data']
    assert data['order_count'] == 2
    assert data['profit_series'] == [15, 3]
    assert data['total_profit'] == 18
    assert data['sample'] is False
