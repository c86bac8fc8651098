from conftest import login, shopper_url, SHOPPER_PHONE
from app.services import cart as cart_service
from models.notification import Notification


def add(client, headers, product_id, quantity=1):
    return client.post(shopper_url('/cart/add'), json={'product_id': product_id, 'quantity': quantity}, headers=headers)


def test_empty_cart(client, auth_headers):
    resp = client.get(shopper_url('/cart'), headers=auth_headers)
    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['items'] == []
    assert data['total'] == 0
    assert data['item_count'] == 0


def test_add_and_view_totals(client, auth_headers):
    resp = add(client, auth_headers, '1', 2)
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Item added to cart successfully!'
    add(client, auth_headers, 9, 3)

    data = client.get(shopper_url('/cart'), headers=auth_headers).get_json()['data']
    assert data['total'] == 85 * 2 + 52 * 3
    assert data['item_count'] == 5
    assert data['profit'] == 15 * 2 + 4 * 3
    assert [i['product_id'] for i in data['items']] == ['1', '9']


def test_add_existing_line_increments(client, auth_headers):
    add(client, auth_headers, '2', 1)
    add(client, auth_headers, '2', 4)
    data = client.get(shopper_url('/cart'), headers=auth_headers).get_json()['data']
    assert len(data['items']) == 1
    assert data['items'][0]['quantity'] == 5


def test_add_creates_notification(client, auth_headers):
    add(client, auth_headers, '3')
    titles = [n.title for n in Notification.query.filter_by(user_phone=SHOPPER_PHONE)]
    assert titles == ['Item Added to Cart']


def test_add_out_of_stock(client, auth_headers):
    resp = add(client, auth_headers, '12')
    assert resp.status_code == 400
    assert 'out of stock' in resp.get_json()['message']


def test_add_unknown_product(client, auth_headers):
    assert add(client, auth_headers, '999').status_code == 404


def test_add_bad_quantity(client, auth_headers):
    assert add(client, auth_headers, '1', 0).status_code == 400


def test_add_over_line_maximum(client, app, auth_headers):
    limit = app.config['CART_MAX_QUANTITY_PER_ITEM']
    assert add(client, auth_headers, '1', limit).status_code == 200
    resp = add(client, auth_headers, '1', 1)
    assert resp.status_code == 400


def test_update_quantity(client, auth_headers):
    add(client, auth_headers, '1')
    resp = client.post(shopper_url('/cart/update'), json={'product_id': '1', 'quantity': 7}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Quantity updated'
    assert resp.get_json()['data']['item_count'] == 7


def test_update_to_zero_removes_line(client, auth_headers):
    add(client, auth_headers, '1')
    resp = client.post(shopper_url('/cart/update'), json={'product_id': '1', 'quantity': 0}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Item removed from cart'
    assert resp.get_json()['data']['items'] == []


def test_update_missing_line(client, auth_headers):
    resp = client.post(shopper_url('/cart/update'), json={'product_id': '1', 'quantity': 2}, headers=auth_headers)
    assert resp.status_code == 404


def test_remove_and_clear(client, auth_headers):
    add(client, auth_headers, '1')
    add(client, auth_headers, '2')
    resp = client.post(shopper_url('/cart/remove'), json={'product_id': '1'}, headers=auth_headers)
    assert resp.status_code == 200
    assert [i['product_id'] for i in resp.get_json()['data']['items']] == ['2']
    assert client.post(shopper_url('/cart/remove'), json={'product_id': '1'}, headers=auth_headers).status_code == 404

    resp = client.post(shopper_url('/cart/clear'), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Cart cleared'
    assert cart_service.get_lines(SHOPPER_PHONE) == []


def test_toast_in_shopper_language(client):
    headers = login(client, phone='+919800000002', language='hi')
    resp = add(client, headers, '1')
    assert resp.get_json()['message'] == 'आइटम कार्ट में सफलतापूर्वक जोड़ा गया!'
    # missing Hindi string falls back to English
    resp = client.post(shopper_url('/cart/clear'), headers=headers)
    assert resp.get_json()['message'] == 'Cart cleared'


def test_carts_are_per_shopper(client, auth_headers):
    add(client, auth_headers, '1')
    other = login(client, phone='+919800000003')
    data = client.get(shopper_url('/cart'), headers=other).get_json()['data']
    assert data['items'] == []


def test_simultaneous_first_add_merges_into_line(client, auth_headers, monkeypatch):
    add(client, auth_headers, '2', 1)
    real_line = cart_service._line
    calls = []

    def line_not_seen_yet(user_phone, product_id):
        calls.append(product_id)
        if len(calls) == 1:
            return None
        return real_line(user_phone, product_id)

    monkeypatch.setattr(cart_service, '_line', line_not_seen_yet)
    resp = add(client, auth_headers, '2', 2)
    monkeypatch.undo()
    assert resp.status_code == 200

    data = client.get(shopper_url('/cart'), headers=auth_headers).get_json()['data']
    assert len(data['items']) == 1
    assert data['items'][0]['quantity'] == 3
