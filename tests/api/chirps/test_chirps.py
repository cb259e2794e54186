import uuid
from models.chirps import Chirp
from tests.helpers import bearer


async def post_chirp(client, user, headers, body):
    return await client.post("/api/chirps", json={"body": body, "userId": str(user.id)}, headers=headers)


async def test_create_chirp(client, session, user, auth_headers):
    response = await post_chirp(client, user, auth_headers, "I'm the one who knocks!")

    assert response.status_code == 201
    chirp = response.json()["chirp"]
    assert chirp["body"] == "I'm the one who knocks!"
    assert chirp["userId"] == str(user.id)
    assert chirp["id"]
    assert "createdAt" in chirp and "updatedAt" in chirp

    assert session.query(Chirp).count() == 1


async def test_create_chirp_filters_profanity(client, session, user, auth_headers):
    response = await post_chirp(client, user, auth_headers, "This is kerfuffle")

    assert response.status_code == 201
    assert response.json()["chirp"]["body"] == "This is ****"

    # Stored filtered
    assert session.query(Chirp).one().body == "This is ****"


async def test_create_chirp_too_long(client, session, user, auth_headers):
    response = await post_chirp(client, user, auth_headers, "a" * 141)

    assert response.status_code == 400
    assert response.json() == {"error": "Chirp is too long. Max length is 140"}
    assert session.query(Chirp).count() == 0


async def test_create_chirp_max_length(client, user, auth_headers):
    response = await post_chirp(client, user, auth_headers, "a" * 140)

    assert response.status_code == 201


async def test_create_chirp_empty_body(client, user, auth_headers):
    response = await post_chirp(client, user, auth_headers, "")

    assert response.status_code == 400
    assert response.json() == {"error": "Chirp body cannot be empty"}


async def test_create_chirp_missing_user_id(client, user, auth_headers):
    response = await client.post("/api/chirps", json={"body": "hello"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: userId"}


async def test_create_chirp_unknown_user(client, user, auth_headers):
    response = await client.post("/api/chirps", json={
        "body": "hello",
        "userId": str(uuid.uuid4())
    }, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


async def test_create_chirp_requires_token(client, user):
    response = await post_chirp(client, user, {}, "hello")

    assert response.status_code == 401


async def test_create_chirp_rejects_expired_token(client, user):
    from core.config import settings
    from services.token_service import TokenService

    expired = TokenService.make_jwt(user.id, -1, settings.SECRET_KEY)
    response = await post_chirp(client, user, bearer(expired), "hello")

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


async def test_list_chirps(client, user, other_user, auth_headers):
    await post_chirp(client, user, auth_headers, "first")
    await post_chirp(client, other_user, auth_headers, "second")
    await post_chirp(client, user, auth_headers, "third")

    response = await client.get("/api/chirps")

    assert response.status_code == 200
    bodies = [chirp["body"] for chirp in response.json()["userChirps"]]
    assert bodies == ["first", "second", "third"]


async def test_list_chirps_sorted_desc(client, user, auth_headers):
    await post_chirp(client, user, auth_headers, "first")
    await post_chirp(client, user, auth_headers, "second")

    response = await client.get("/api/chirps", params={"sort": "desc"})

    bodies = [chirp["body"] for chirp in response.json()["userChirps"]]
    assert bodies == ["second", "first"]


async def test_list_chirps_by_author(client, user, other_user, auth_headers):
    await post_chirp(client, user, auth_headers, "mine")
    await post_chirp(client, other_user, auth_headers, "theirs")

    response = await client.get("/api/chirps", params={"authorId": str(other_user.id)})

    chirps = response.json()["userChirps"]
    assert [chirp["body"] for chirp in chirps] == ["theirs"]
    assert chirps[0]["userId"] == str(other_user.id)


async def test_list_chirps_empty(client, session):
    response = await client.get("/api/chirps")

    assert response.status_code == 200
    assert response.json() == {"userChirps": []}


async def test_get_chirp(client, user, auth_headers):
    created = (await post_chirp(client, user, auth_headers, "hello there")).json()["chirp"]

    response = await client.get(f"/api/chirps/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


async def test_get_chirp_not_found(client, session):
    response = await client.get(f"/api/chirps/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Chirp not found"}


async def test_get_chirp_malformed_id(client, session):
    response = await client.get("/api/chirps/not-a-uuid")

    assert response.status_code == 404


async def test_delete_own_chirp(client, session, user, auth_headers):
    created = (await post_chirp(client, user, auth_headers, "bye")).json()["chirp"]

    response = await client.delete(f"/api/chirps/{created['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert session.query(Chirp).count() == 0


async def test_delete_someone_elses_chirp(client, session, user, other_user, auth_headers):
    created = (await post_chirp(client, other_user, auth_headers, "not yours")).json()["chirp"]

    response = await client.delete(f"/api/chirps/{created['id']}", headers=auth_headers)

    assert response.status_code == 403
    assert session.query(Chirp).count() == 1


async def test_delete_missing_chirp(client, user, auth_headers):
    response = await client.delete(f"/api/chirps/{uuid.uuid4()}", headers=auth_headers)

    assert response.status_code == 404


async def test_create_chirp_whitespace_only_body_is_accepted(client, session, user, auth_headers):
    """Only the empty string counts as empty; blanks are stored as sent."""
    response = await post_chirp(client, user, auth_headers, "   ")

    assert response.status_code == 201
    assert response.json()["chirp"]["body"] == "   "
    assert session.query(Chirp).one().body == "   "
