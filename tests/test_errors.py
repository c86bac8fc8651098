from app.version import API_PREFIX


def assert_envelope(resp, status):
    assert resp.status_code == status
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == status
    assert isinstance(data['message'], str) and data['message']
    return data


def test_unknown_route_is_json_404(client):
    assert_envelope(client.get('/no/such/route'), 404)


def test_wrong_method_is_json_405(client):
    assert_envelope(client.delete(f"{API_PREFIX}/categories"), 405)


def test_service_not_found_maps_to_404(client):
    data = assert_envelope(client.get('/__missing'), 404)
    assert data['message'] == 'Order not found'


def test_service_validation_error_maps_to_400(client):
    data = assert_envelope(client.get('/__invalid'), 400)
    assert data['message'] == 'Invalid request'


def test_unexpected_error_is_generic_500(client):
    data = assert_envelope(client.get('/__boom'), 500)
    assert 'boom' not in data['message']
    assert 'RuntimeError' not in data['message']


def test_body_that_is_not_json_lists_field_errors(client):
    resp = client.post(
        f"{API_PREFIX}/translate",
        data='target=hi',
        content_type='application/x-www-form-urlencoded',
    )
    data = assert_envelope(resp, 400)
    assert data['errors']


def test_missing_product_from_catalog(client):
    data = assert_envelope(client.get(f"{API_PREFIX}/products/does-not-exist"), 404)
    assert 'not found' in data['message'].lower()
