def find_by_name(items, pattern, what):
    """The single item whose name contains `pattern`, ignoring case.

    Raises `ValueError` unless exactly one item matches. `what` names the kind
    of item in the error message.
    """
    pattern = pattern.lower()
    matches = [x for x in items if x.name is not None and pattern in x.name.lower()]

    if not matches:
        raise ValueError(f"No {what} name matched {pattern!r}.")

    if len(matches) > 1:
        raise ValueError(f"More than one {what} name matched {pattern!r}: {matches}")

    return matches[0]
