from apicase import ApiTestCase

from budgetapp.extensions import db
from budgetapp.models import Identity, UserProfile


class AuthApiTests(ApiTestCase):
    def test_signup_creates_identity_and_profile(self):
        resp = self.client.post(
            "/api/auth/signup", json={"email": "Alice@Example.com", "password": "secret123", "full_name": "Alice Liddell"},
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.get_json()
        self.assertEqual(body["user"]["email"], "alice@example.com")
        self.assertTrue(body["session"]["access_token"])
        self.assertEqual(body["profile"]["display_name"], "Alice Liddell")
        self.assertEqual(body["profile"]["currency_code"], "USD")
        self.assertEqual(body["profile"]["timezone"], "UTC")
        self.assertIsNone(body["profile"]["active_budget_id"])

    def test_display_name_defaults_to_email_local_part(self):
        self.client.post("/api/auth/signup", json={"email": "bob.smith@example.com", "password": "secret123"})
        profile = UserProfile.query.filter_by(email="bob.smith@example.com").one()
        self.assertEqual(profile.display_name, "bob.smith")

    def test_signup_validation(self):
        resp = self.client.post("/api/auth/signup", json={"email": "alice@example.com"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/auth/signup", json={"email": "not-an-email", "password": "secret123"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["field"], "email")
        resp = self.client.post("/api/auth/signup", json={"email": "alice@example.com", "password": "123"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["field"], "password")

    def test_duplicate_signup_conflicts(self):
        self.signup()
        resp = self.client.post("/api/auth/signup", json={"email": "alice@example.com", "password": "another1"})
        self.assertEqual(resp.status_code, 409)

    def test_login_returns_usable_token(self):
        self.signup()
        resp = self.client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
        self.assertEqual(resp.status_code, 200)
        token = resp.get_json()["session"]["access_token"]
        resp = self.client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["profile"]["email"], "alice@example.com")

    def test_login_rejects_bad_password(self):
        self.signup()
        resp = self.client.post("/api/auth/login", json={"email": "alice@example.com", "password": "wrong-one"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json()["message"], "Invalid email or password")

    def test_login_recreates_missing_profile(self):
        user_id, _ = self.signup()
        db.session.delete(db.session.get(UserProfile, user_id))
        db.session.commit()

        resp = self.client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["profile"]["display_name"], "alice")
        self.assertIsNotNone(db.session.get(UserProfile, user_id))

    def test_requests_without_token_are_unauthenticated(self):
        for path in ("/api/budgets", "/api/profile", "/api/dashboard"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 401, path)
            self.assertEqual(resp.get_json()["error"], "Unauthorized")

    def test_malformed_token_is_unauthenticated(self):
        resp = self.client.get("/api/budgets", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(resp.status_code, 401)
        resp = self.client.get("/api/budgets", headers={"Authorization": "Token abc"})
        self.assertEqual(resp.status_code, 401)

    def test_logout_revokes_token(self):
        _, headers = self.signup()
        resp = self.client.post("/api/auth/logout", headers=headers)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.get("/api/budgets", headers=headers)
        self.assertEqual(resp.status_code, 401)

    def test_token_for_deleted_identity_is_rejected(self):
        user_id, headers = self.signup()
        db.session.delete(db.session.get(Identity, user_id))
        db.session.commit()
        resp = self.client.get("/api/profile", headers=headers)
        self.assertEqual(resp.status_code, 401)
