from typing import Iterable

from devconsole.models import BasicRequiresAuthentication, ConnectionRequest, FieldMapping

ENABLED = "on"


def build_connection_payload(
    request: ConnectionRequest, mappings: Iterable[FieldMapping]
) -> dict[str, str]:
    """
    Assemble the form fields shared by the create and edit submissions.
    Disabled privileges are left out, the console has no explicit "off".
    """
    payload = {
        "Identifier": request.identifier,
        "Description": request.description,
        "GameDB": request.game_db,
        "GameDBName": "",
        "AuthProvider": request.authentication.provider,
    }

    if isinstance(request.authentication, BasicRequiresAuthentication):
        payload["Basic256RequiresAuth"] = ENABLED
        payload["Basic256AuthSharedSecret"] = request.authentication.shared_secret

    for mapping in mappings:
        privilege = request.privilege_for(mapping.label)

        if privilege is None:
            continue

        for flag in privilege.enabled_flags():
            payload[f"{mapping.prefix}-{flag}"] = ENABLED

    return payload
