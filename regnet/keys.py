"""Composite key construction and the registry's key namespaces."""

from regnet.exceptions import InvalidArgumentError

DEFAULT_NAMESPACE_PREFIX = "org.property-registration-network.regnet"

COMPOSITE_KEY_DELIMITER = "\x00"
_MAX_UNICODE_RUNE = "\U0010ffff"

# Namespace names as they appear on the ledger
REQUEST_USER = "requestUser"
APPROVED_USER = "approvedUser"
REQUEST_PROPERTY = "requestPropertyKey"
APPROVED_PROPERTY = "approvedPropertyKey"


def _validate_component(component: str, what: str) -> None:
    if not isinstance(component, str):
        raise InvalidArgumentError(f"{what} must be a string, got {type(component).__name__}")
    if COMPOSITE_KEY_DELIMITER in component or _MAX_UNICODE_RUNE in component:
        raise InvalidArgumentError(f"{what} {component!r} contains a reserved character")


def make_composite_key(namespace: str, segments: list[str]) -> str:
    """Build a composite key from a namespace and identifier segments.

    The layout is ``\\x00 namespace \\x00 (segment \\x00)*`` so keys of one
    namespace share a common prefix and never collide with simple keys.

    Parameters
    ----------
    namespace : str
        Object type the key belongs to.
    segments : list[str]
        Identifier attributes, in order.

    Returns
    -------
    str
        The composite key.
    """
    if not namespace:
        raise InvalidArgumentError("Composite key namespace must not be empty")
    _validate_component(namespace, "Namespace")
    parts = [COMPOSITE_KEY_DELIMITER, namespace, COMPOSITE_KEY_DELIMITER]
    for segment in segments:
        _validate_component(segment, "Key segment")
        parts.append(segment)
        parts.append(COMPOSITE_KEY_DELIMITER)
    return "".join(parts)


def split_composite_key(key: str) -> tuple[str, list[str]]:
    """Split a composite key back into its namespace and segments."""
    if not key.startswith(COMPOSITE_KEY_DELIMITER) or not key.endswith(COMPOSITE_KEY_DELIMITER):
        raise InvalidArgumentError(f"{key!r} is not a composite key")
    components = key[1:-1].split(COMPOSITE_KEY_DELIMITER)
    return components[0], components[1:]


class KeySchema:
    """Derives the ledger key of every record kind.

    Users are identified by ``name-nationalIdNumber``; properties by their
    property id. Each record kind has its own namespace under ``prefix``.
    """

    def __init__(self, prefix: str = DEFAULT_NAMESPACE_PREFIX) -> None:
        self.prefix = prefix

    def namespace(self, name: str) -> str:
        return f"{self.prefix}.{name}"

    @staticmethod
    def user_identifier(name: str, national_id_number: str) -> str:
        return f"{name}-{national_id_number}"

    def request_user(self, name: str, national_id_number: str) -> str:
        return make_composite_key(
            self.namespace(REQUEST_USER),
            [self.user_identifier(name, national_id_number)],
        )

    def approved_user(self, name: str, national_id_number: str) -> str:
        return make_composite_key(
            self.namespace(APPROVED_USER),
            [self.user_identifier(name, national_id_number)],
        )

    def request_property(self, property_id: str) -> str:
        return make_composite_key(self.namespace(REQUEST_PROPERTY), [property_id])

    def approved_property(self, property_id: str) -> str:
        return make_composite_key(self.namespace(APPROVED_PROPERTY), [property_id])

    def is_approved_user_key(self, key: str) -> bool:
        """Whether ``key`` lies in the approved-user namespace."""
        try:
            namespace, segments = split_composite_key(key)
        except InvalidArgumentError:
            return False
        return namespace == self.namespace(APPROVED_USER) and len(segments) == 1
