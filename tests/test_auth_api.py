async def register(client, username="carol", password="s3cret"):
    return await client.post("/auth/register", json={
        "username": username,
        "password": password,
        "again_password": password,
    })


async def test_register_login_and_me(client):
    response = await register(client)
    assert response.json()["success"] is True

    response = await client.post("/auth/login", json={"username": "carol", "password": "s3cret"})
    body = response.json()
    assert body["success"] is True

    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert response.status_code == 200
    assert response.json()["username"] == "carol"
    assert response.json()["nickname"] == "carol"


async def test_register_rejects_duplicate_username(client):
    await register(client)

    response = await register(client)

    assert response.json() == {
        "success": False,
        "message": None,
        "error": "Username already registered",
        "token": None,
    }


async def test_register_rejects_mismatched_passwords(client):
    response = await client.post("/auth/register", json={
        "username": "dave",
        "password": "one",
        "again_password": "two",
    })

    assert response.json()["error"] == "Passwords do not match"


async def test_login_with_wrong_password(client):
    await register(client)

    response = await client.post("/auth/login", json={"username": "carol", "password": "nope"})

    assert response.json()["success"] is False
    assert response.json()["token"] is None


async def test_logout_revokes_token(client, fake_redis):
    await register(client)
    response = await client.post("/auth/login", json={"username": "carol", "password": "s3cret"})
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    response = await client.post("/auth/logout", headers=headers)
    assert response.json()["message"] == "Logout successful"
    assert len(fake_redis.values) == 1

    response = await client.get("/api/v2/resources", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has been revoked"


async def test_health(client):
    response = await client.get("/health")

    assert response.json() == {"status": "healthy"}
