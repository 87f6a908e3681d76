import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from leettrack.config import Config


def create_access_token(user_data: dict, expiry: Optional[timedelta] = None) -> str:
    if expiry is None:
        expiry = timedelta(seconds=Config.JWT_ACCESS_TOKEN_EXPIRY)

    payload = {
        "user": user_data,
        "exp": datetime.now(timezone.utc) + expiry,
        "jti": str(uuid.uuid4()),
    }

    return encode_token(payload)


def encode_token(payload):
    return jwt.encode(
        payload=payload, key=Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM
    )


def decode_token(token: str) -> Any | None:
    try:
        token_data = jwt.decode(
            jwt=token, key=Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM]
        )
        return token_data

    except jwt.PyJWTError as _:
        return None
