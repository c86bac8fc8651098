from datetime import datetime
from sqlalchemy import text, inspect
from models import db
from models.order import Order


def test_order_user_created_index_used(app):
    insp = inspect(db.engine)
    assert any(ix['name'] == 'ix_order_user_created' for ix in insp.get_indexes('order'))
    db.session.add(Order(
        user_phone='+919000000001',
        payment_mode='cod',
        delivery_address='x',
        contact_phone='+919000000001',
        total_amount=1,
        estimated_delivery_at=datetime.utcnow(),
    ))
    db.session.commit()
    plan_rows = db.session.execute(text(
        "EXPLAIN QUERY PLAN SELECT * FROM 'order' WHERE user_phone='+919000000001' ORDER BY created_at DESC"
    ))
    plan = " ".join(r[3] for r in plan_rows)
    assert 'ix_order_user_created' in plan


def test_notification_key_index_present(app):
    insp = inspect(db.engine)
    assert any(ix['name'] == 'ix_notification_user_key' for ix in insp.get_indexes('notification'))
