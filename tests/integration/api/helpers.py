import logging

from tests.utils.reset_link import NOTIFIER_LOGGER, reset_tokens_from_log

SIGNUP = {"name": "A", "email": "a@x.com", "password": "secret1"}


async def signup(client, **overrides):
    payload = {**SIGNUP, **overrides}
    response = await client.post("/api/signup", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def request_reset_token(client, caplog, email="a@x.com") -> str:
    """Run forgot-password and return the token from the logged reset link"""
    caplog.set_level(logging.INFO, logger=NOTIFIER_LOGGER)
    response = await client.post("/api/forgot-password", json={"email": email})
    assert response.status_code == 200, response.text
    return reset_tokens_from_log(caplog)[-1]
