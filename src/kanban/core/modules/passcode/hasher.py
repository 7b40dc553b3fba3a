import hashlib

# Namespaces the digest so it cannot be matched against plain SHA-256 tables of 6-digit strings.
HASH_NAMESPACE = "kanban-passcode:"


def hash_passcode(code: str) -> str:
    """Return the lowercase hex SHA-256 digest used to store and look up a passcode.

    Deterministic and unsalted: equal codes produce equal digests, which lets the
    unique index on the digest double as duplicate-code detection. Defined for any
    string, including lone surrogates.
    """
    return hashlib.sha256(f"{HASH_NAMESPACE}{code}".encode("utf-8", "surrogatepass")).hexdigest()
