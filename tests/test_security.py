import unittest
from unittest.mock import patch

import jwt
from fastapi import HTTPException

from petdesk.config import Settings
from petdesk.core.security import authenticate_request


class SecurityTest(unittest.TestCase):
    def _settings(self, **values):
        return patch("petdesk.core.security.get_settings", return_value=Settings(**values))

    def test_open_when_nothing_configured(self):
        with self._settings(API_KEYS=None, JWT_SECRET=None):
            self.assertIsNone(authenticate_request(require_auth=True))

    def test_api_key(self):
        with self._settings(API_KEYS="alpha, beta"):
            self.assertEqual(authenticate_request(api_key="beta", require_auth=True), {"auth_type": "api_key"})
            with self.assertRaises(HTTPException) as ctx:
                authenticate_request(api_key="gamma", require_auth=True)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_bearer_token(self):
        token = jwt.encode({"sub": "operator"}, "s3cret-signing-key-for-tests-only", algorithm="HS256")
        with self._settings(JWT_SECRET="s3cret-signing-key-for-tests-only"):
            result = authenticate_request(authorization="Bearer {}".format(token), require_auth=True)
            with self.assertRaises(HTTPException):
                authenticate_request(authorization="Bearer broken", require_auth=True)
        self.assertEqual(result["payload"]["sub"], "operator")


if __name__ == "__main__":
    unittest.main()
