"""Extraction of cloud instance identifiers from node provider references."""


def instance_id_from_provider_id(provider_id: str | None) -> str:
    """Return the instance id embedded in a node's ``spec.providerID``.

    AWS nodes report ``aws:///<zone>/<instance-id>``; the id is the last path
    segment. A reference without ``/`` is returned unchanged and an empty
    reference gives an empty string.

    Args:
        provider_id: Provider reference of the node

    Returns:
        Instance id, or ``""`` if there is none
    """
    if not provider_id:
        return ""
    return provider_id.rsplit("/", 1)[-1]
