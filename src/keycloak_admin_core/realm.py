"""Selection of the realm used to authenticate admin calls."""


class RealmResolver:
    """Pick the realm a token is requested from.

    A service account or admin user often lives in ``master`` while managing
    a tenant realm. When ``authentication_realm`` is set it is used for every
    token request; otherwise the realm being managed is used.
    """

    def __init__(self, authentication_realm: str | None = None) -> None:
        self.authentication_realm = authentication_realm

    def resolve(self, requested_realm: str) -> str:
        if self.authentication_realm:
            return self.authentication_realm
        return requested_realm
