from datetime import datetime, date, timedelta
from conftest import shopper_url, SHOPPER_PHONE
from models import db
from models.notification import Notification
from app.services import notifications


def test_relative_time_labels():
    now = datetime(2026, 5, 1, 12, 0, 0)
    assert notifications.relative_time(now - timedelta(seconds=30), now) == 'Just now'
    assert notifications.relative_time(now - timedelta(minutes=1), now) == '1 minute ago'
    assert notifications.relative_time(now - timedelta(minutes=45), now) == '45 minutes ago'
    assert notifications.relative_time(now - timedelta(hours=2), now) == '2 hours ago'
    assert notifications.relative_time(now - timedelta(days=1), now) == '1 day ago'


def test_welcome_notifications_listed_oldest_first(client, app, auth_headers):
    notifications.seed_welcome_notifications(SHOPPER_PHONE)
    db.session.commit()
    resp = client.get(shopper_url('/notifications'), headers=auth_headers)
    data = resp.get_json()['data']
    assert resp.get_json()['count'] == 3
    assert [n['time'] for n in data] == ['2 days ago', '1 day ago', '2 hours ago']
    assert data[-1]['title'] == 'Welcome to Walmart Viraddhi!'


def test_clear_notifications(client, auth_headers):
    notifications.seed_welcome_notifications(SHOPPER_PHONE)
    db.session.commit()
    resp = client.post(shopper_url('/notifications/clear'), headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()['removed'] == 3
    assert client.get(shopper_url('/notifications'), headers=auth_headers).get_json()['data'] == []


def test_expiry_check_is_deduplicated(client, auth_headers):
    first = client.post(shopper_url('/notifications/check-expiring'), headers=auth_headers).get_json()
    assert first['added'] > 0
    assert all(n['title'] == 'Item Expiring Soon' for n in first['data'])
    second = client.post(shopper_url('/notifications/check-expiring'), headers=auth_headers).get_json()
    assert second['added'] == 0
    keys = [n.key for n in Notification.query.filter_by(user_phone=SHOPPER_PHONE)]
    assert len(keys) == len(set(keys))


def test_expiry_window_bounds(app):
    today = date(2026, 6, 1)
    added = notifications.check_expiring_items(SHOPPER_PHONE, today=today, window_days=0)
    assert added == []
    added = notifications.check_expiring_items(SHOPPER_PHONE, today=today, window_days=6)
    names = {n.message.split(' will expire')[0] for n in added}
    assert 'Amul Taaza Toned Milk' in names
    assert 'India Gate Basmati Rice' not in names


def test_expiry_sweep_task_covers_every_shopper(client, app):
    from conftest import login
    from app.tasks.notifications import sweep_expiring_items_task
    login(client, phone='+919800000011')
    login(client, phone='+919800000012')
    added = sweep_expiring_items_task(app.config['EXPIRY_ALERT_DAYS'])
    assert added > 0
    per_shopper = {
        phone: Notification.query.filter_by(user_phone=phone).count()
        for phone in ('+919800000011', '+919800000012')
    }
    assert per_shopper['+919800000011'] == per_shopper['+919800000012'] > 0


def test_cli_expiry_sweep(client, app):
    from conftest import login
    login(client, phone='+919800000013')
    result = app.test_cli_runner().invoke(args=['expiry-sweep'])
    assert result.exit_code == 0
    assert 'Added' in result.output
