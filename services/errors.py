"""
Fashion shot pipeline errors
Each error carries a stable code so callers never need to parse messages
"""


class FashionShotError(Exception):
    """Base class for every failure the generation pipeline reports"""

    code = "generation_failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(FashionShotError):
    code = "missing_input"


class DecodeError(FashionShotError):
    code = "decode_failed"


class EncodeError(FashionShotError):
    code = "encode_failed"


class MissingCredentialError(FashionShotError):
    code = "missing_credential"


class PermissionDeniedError(FashionShotError):
    """The remote API rejected the credential (403 / PERMISSION_DENIED / entity not found)"""

    code = "permission_denied"


class ModelRefusedError(FashionShotError):
    """The model answered with text instead of an image"""

    code = "model_refused"

    def __init__(self, message: str, excerpt: str):
        super().__init__(message)
        self.excerpt = excerpt


class EmptyResponseError(FashionShotError):
    code = "empty_response"


class CredentialSelectionError(FashionShotError):
    code = "credential_selection_failed"
