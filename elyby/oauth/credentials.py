"""Registered OAuth2 application credentials"""

from dataclasses import dataclass

from ..errors import ConfigurationError


@dataclass(frozen=True)
class OAuthCredentials:
    """Credentials issued when registering an application on Ely.by

    Attributes:
        client_id: Application identifier
        client_secret: Application secret, used only server-to-server
        redirect_uri: Callback URL registered for the application
    """
    client_id: str
    client_secret: str
    redirect_uri: str

    def __post_init__(self):
        if not self.client_id:
            raise ConfigurationError("client_id")
        if not self.client_secret:
            raise ConfigurationError("client_secret")
        if not self.redirect_uri:
            raise ConfigurationError("redirect_uri")

    def __repr__(self) -> str:
        return f"OAuthCredentials(client_id={self.client_id!r}, redirect_uri={self.redirect_uri!r})"
