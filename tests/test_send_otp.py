from unittest.mock import patch


def test_send_otp_success(client, fake_mailer, unique_email):
    response = client.post("/send-otp", json={"email": unique_email})

    assert response.status_code == 200, response.json()
    data = response.json()
    assert data["status"] == "success"
    assert "otp sent" in data["message"].lower()

    assert len(fake_mailer.sent) == 1
    sent_email, code = fake_mailer.sent[0]
    assert sent_email == unique_email
    assert code.isdigit() and len(code) == 6


def test_send_otp_normalizes_email(client, fake_mailer, unique_email):
    response = client.post("/send-otp", json={"email": f"  {unique_email.upper()} "})

    assert response.status_code == 200, response.json()
    assert fake_mailer.sent[0][0] == unique_email


def test_send_otp_invalid_email(client, fake_mailer):
    response = client.post("/send-otp", json={"email": "not-an-email"})

    assert response.status_code == 422
    data = response.json()
    assert data["status"] == "error"
    assert "email" in data["message"]
    assert fake_mailer.sent == []


def test_send_otp_missing_email(client):
    response = client.post("/send-otp", json={})
    assert response.status_code == 422


def test_send_otp_delivery_failure_is_reported(client, fake_mailer, unique_email):
    fake_mailer.fail = True

    response = client.post("/send-otp", json={"email": unique_email})

    assert response.status_code == 502
    assert "failed to send" in response.json()["message"].lower()


def test_delivery_failure_keeps_pending_code_for_resend(client, fake_mailer, unique_email):
    fake_mailer.fail = True
    response = client.post("/send-otp", json={"email": unique_email})
    assert response.status_code == 502

    # the stored code still verifies even though the email never arrived
    undelivered_code = fake_mailer.last_code(unique_email)
    response = client.post(
        "/verify-otp",
        json={"name": "Jane", "dob": "1990-01-01", "email": unique_email, "otp": undelivered_code},
    )
    assert response.status_code == 201, response.json()


def test_resend_invalidates_previous_code(client, fake_mailer, unique_email):
    with patch(
        "noteapp.features.auth.services.auth_service.generate_otp",
        side_effect=["111111", "222222"],
    ):
        assert client.post("/send-otp", json={"email": unique_email}).status_code == 200
        assert client.post("/send-otp", json={"email": unique_email}).status_code == 200

    stale = client.post(
        "/verify-otp",
        json={"name": "Jane", "dob": "1990-01-01", "email": unique_email, "otp": "111111"},
    )
    assert stale.status_code == 400
    assert stale.json()["message"] == "Invalid OTP"

    fresh = client.post(
        "/verify-otp",
        json={"name": "Jane", "dob": "1990-01-01", "email": unique_email, "otp": "222222"},
    )
    assert fresh.status_code == 201, fresh.json()
