"""Discord request signature verification."""
from typing import Union

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from .observability import get_logger

logger = get_logger('picasso-sdk.verification')


def verify_signature(
    signature: str,
    timestamp: str,
    body: Union[bytes, str],
    public_key: str,
) -> bool:
    """Verify an Ed25519 signature over ``timestamp + body``.

    Malformed input (non-hex signature or key, wrong key length) is reported
    as a failed verification rather than raised.

    Args:
        signature: X-Signature-Ed25519 header (hex)
        timestamp: X-Signature-Timestamp header
        body: Raw request body, exactly as received
        public_key: Application's public key (hex)

    Returns:
        True if the signature is valid
    """
    if not public_key:
        logger.warning("Public key not configured")
        return False

    if isinstance(body, str):
        body = body.encode('utf-8')

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode('utf-8') + body, bytes.fromhex(signature))
        return True
    except BadSignatureError:
        logger.debug("Signature mismatch")
        return False
    except (ValueError, TypeError) as e:
        logger.warning("Malformed signature input", error=e)
        return False
