from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError, jwt
from notifications_api.config import settings
from notifications_api.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError
from notifications_api.services.marketing_notifications_service import TokenIdentity
import logging

# Initialize logging
logger = logging.getLogger(__name__)

# Tokens are issued by the identity provider; this service only verifies them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def decode_access_token(token: str) -> TokenIdentity:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        logger.warning("Token expired")
        raise TokenExpiredError()
    except JWTError as e:
        logger.warning(f"JWT decoding failed: {str(e)}")
        raise InvalidTokenError()

    sub = payload.get("sub")
    if not sub:
        logger.warning("Token is missing 'sub' claim")
        raise InvalidTokenError("Token does not contain 'sub' field.")

    return TokenIdentity(sub=sub, email=payload.get("email"))


# Dependency for routes that require an authenticated caller
async def get_current_identity(token: str | None = Depends(oauth2_scheme)) -> TokenIdentity:
    if not token:
        raise AuthenticationError("Not authenticated")
    return decode_access_token(token)
