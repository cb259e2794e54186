import uuid


def polka_headers(key="test-polka-key"):
    return {"Authorization": f"ApiKey {key}"}


async def test_upgrade_user(client, session, user):
    response = await client.post("/api/polka/webhooks", json={
        "event": "user.upgraded",
        "data": {"userId": str(user.id)}
    }, headers=polka_headers())

    assert response.status_code == 204

    session.refresh(user)
    assert user.is_chirpy_red is True


async def test_other_events_are_ignored(client, session, user):
    response = await client.post("/api/polka/webhooks", json={
        "event": "user.payment_failed",
        "data": {"userId": str(user.id)}
    }, headers=polka_headers())

    assert response.status_code == 204

    session.refresh(user)
    assert user.is_chirpy_red is False


async def test_upgrade_unknown_user(client, session):
    response = await client.post("/api/polka/webhooks", json={
        "event": "user.upgraded",
        "data": {"userId": str(uuid.uuid4())}
    }, headers=polka_headers())

    assert response.status_code == 404


async def test_wrong_api_key(client, session, user):
    response = await client.post("/api/polka/webhooks", json={
        "event": "user.upgraded",
        "data": {"userId": str(user.id)}
    }, headers=polka_headers("wrong"))

    assert response.status_code == 401
    session.refresh(user)
    assert user.is_chirpy_red is False


async def test_missing_api_key(client, session, user):
    response = await client.post("/api/polka/webhooks", json={
        "event": "user.upgraded",
        "data": {"userId": str(user.id)}
    })

    assert response.status_code == 401
    assert response.json() == {"error": "Missing Authorization header"}


async def test_login_reports_chirpy_red(client, session, user):
    from tests.helpers import TEST_PASSWORD

    user.is_chirpy_red = True
    session.commit()

    response = await client.post("/api/login", json={"email": user.email, "password": TEST_PASSWORD})

    assert response.json()["isChirpyRed"] is True
