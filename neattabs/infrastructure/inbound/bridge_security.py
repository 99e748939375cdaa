import hmac

BRIDGE_TOKEN_HEADER = "x-neattabs-bridge-token"


class BridgeSecurityService:
    def __init__(self, secret_token: str):
        self.secret_token = secret_token or ""

    def verify_token(self, candidate: str) -> bool:
        if not self.secret_token:
            return False
        return hmac.compare_digest(self.secret_token.encode("utf-8"), (candidate or "").encode("utf-8"))
