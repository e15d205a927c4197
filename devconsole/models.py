from enum import auto
from typing import Any, ClassVar, Iterator, Literal, TypeAlias, TypeVar

from pydantic import BaseModel as _BaseModel
from pydantic import ConfigDict, Field, field_validator

from devconsole.errors import ValidationError
from devconsole.shared.compat import StrEnum

T = TypeVar("T", bound="BaseModel")

DEFAULT_GAME_DB = "Default"
AUTH_PROVIDER = "basic256"


class BaseModel(_BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_raw(cls: type[T], data: str | bytes) -> T:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[T], obj: dict[str, Any]) -> T:
        return cls.model_validate(obj)


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Connection(FrozenModel):
    name: str
    description: str = ""


class Table(FrozenModel):
    name: str


class TablePrivilegeSpec(FrozenModel):
    """
    Privileges a connection gets on a single BigDB table. Every flag maps to
    one checkbox on the connection form; the remote side treats an absent
    checkbox as unchecked.
    """

    # Field name -> checkbox suffix used by the console form.
    FLAGS: ClassVar[dict[str, str]] = {
        "can_load_by_keys": "canloadbykeys",
        "can_create": "cancreate",
        "can_load_by_indexes": "canloadbyindexes",
        "can_delete": "candelete",
        "creator_has_full_rights": "creatorhasfullrights",
        "can_save": "cansave",
    }

    table: Table
    can_load_by_keys: bool = False
    can_create: bool = False
    can_load_by_indexes: bool = False
    can_delete: bool = False
    creator_has_full_rights: bool = False
    can_save: bool = False

    @property
    def table_name(self) -> str:
        return self.table.name

    def enabled_flags(self) -> Iterator[str]:
        for field, flag in self.FLAGS.items():
            if getattr(self, field):
                yield flag


class GameSession(FrozenModel):
    name: str
    navigation_id: str
    session_token: str
    game_id: str


class FieldMapping(FrozenModel):
    label: str
    prefix: str


class Authentication(StrEnum):
    BASIC = auto()
    BASIC_REQUIRES_AUTH = "basic-requires-auth"

    def to_variant(self, shared_secret: str | None = None) -> "AuthenticationVariant":
        if self is Authentication.BASIC:
            return Basic()

        if not shared_secret:
            raise ValidationError(
                "A non-empty shared secret is required when the connection requires authentication."
            )
        return BasicRequiresAuthentication(shared_secret=shared_secret)


class Basic(FrozenModel):
    kind: Literal["basic"] = "basic"
    provider: str = AUTH_PROVIDER


class BasicRequiresAuthentication(FrozenModel):
    kind: Literal["basic-requires-auth"] = "basic-requires-auth"
    provider: str = AUTH_PROVIDER
    shared_secret: str

    @field_validator("shared_secret")
    @classmethod
    def secret_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Shared secret cannot be empty.")
        return value


AuthenticationVariant: TypeAlias = Basic | BasicRequiresAuthentication


class ConnectionRequest(FrozenModel):
    identifier: str
    description: str = ""
    authentication: AuthenticationVariant = Field(default_factory=Basic, discriminator="kind")
    game_db: str = DEFAULT_GAME_DB
    privileges: tuple[TablePrivilegeSpec, ...] = ()

    def privilege_for(self, table_name: str) -> TablePrivilegeSpec | None:
        for privilege in self.privileges:
            if privilege.table_name == table_name:
                return privilege
        return None
