from collections.abc import Mapping, Sequence

from nftplugin.models.metadata import Attribute, Metadata


def matches_attributes(metadata: Metadata, desired: Sequence[Attribute]) -> bool:
    """
    Check whether a token carries every desired attribute.

    Matching is exact and case-sensitive on trait_type and value. Extra
    attributes on the token are ignored, and an empty desired list always
    matches.

    Returns:
        False if the metadata has no attributes list. Entries of the list
        that are not JSON objects never match.
    """
    attributes = metadata.get("attributes")
    if not isinstance(attributes, list):
        return False

    for wanted in desired:
        found = any(
            isinstance(attr, Mapping)
            and attr.get("trait_type") == wanted["trait_type"]
            and attr.get("value") == wanted["value"]
            for attr in attributes
        )
        if not found:
            return False

    return True
