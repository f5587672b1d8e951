import uuid


def generate_request_id() -> str:
    return str(uuid.uuid4())


def describe_exception(exc: BaseException) -> str:
    """
    Flatten an exception and its cause chain into one line,
    e.g. "IntegrityError: ... <- UniqueViolationError: ...".
    """
    parts = []
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(f"{type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return " <- ".join(parts)
