from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from schemawire.bootstrap.config.loader import get_configfile
from schemawire.core.models.config import SerializerConfig


class RegistrySettings(BaseModel):
    url: Annotated[
        str,
        Field(
            description="Base URL of the schema registry, e.g. 'http://localhost:8081'.",
            default="http://localhost:8081"
        )
    ]

    username: Annotated[
        str | None,
        Field(
            description="User for HTTP basic authentication. Leave empty to disable it.",
            default=None
        )
    ]

    password: Annotated[
        str | None,
        Field(
            description="Password for HTTP basic authentication.",
            default=None
        )
    ]

    timeout: Annotated[
        float,
        Field(
            description="Timeout (in seconds) applied to every registry request.",
            default=10.0,
            gt=0
        )
    ]

    cache_capacity: Annotated[
        int,
        Field(
            description=(
                "Capacity of the registry client caches (`cache.capacity`).\n"
                "0 keeps the client default."
            ),
            default=1000,
            ge=0
        )
    ]

    json_schema_support: Annotated[
        bool,
        Field(
            description=(
                "Allow the client to interpret JSON schemas returned by the registry.\n"
                "Required by `serializer.use_latest_version`."
            ),
            default=True
        )
    ]

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Registry url '{v}' must start with http:// or https://")
        return v.rstrip("/")


class SerializerSettings(BaseModel):
    automatic_registration: Annotated[
        bool,
        Field(
            description="Register the candidate schema and frame messages with the returned id.",
            default=True
        )
    ]

    use_latest_version: Annotated[
        bool,
        Field(
            description=(
                "Frame messages with the latest schema registered under the subject.\n"
                "Ignored when automatic_registration is enabled."
            ),
            default=False
        )
    ]

    validate_payload: Annotated[
        bool,
        Field(
            description="Validate every document against the resolved schema before framing it.",
            default=False
        )
    ]

    latest_compatibility_strict: Annotated[
        bool,
        Field(
            description=(
                "Fail when the latest registered schema is not backward compatible\n"
                "with the candidate schema. Only used with use_latest_version."
            ),
            default=True
        )
    ]

    def to_config(self) -> SerializerConfig:
        return SerializerConfig(
            automatic_registration=self.automatic_registration,
            use_latest_version=self.use_latest_version,
            validate_payload=self.validate_payload,
            latest_compatibility_strict=self.latest_compatibility_strict,
        )


class SchemaWireConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCHEMAWIRE_",
        env_nested_delimiter="__",
        extra="allow"
    )

    registry: Annotated[
        RegistrySettings,
        Field(
            description="Schema registry connection settings.",
            default_factory=RegistrySettings
        )
    ]

    serializer: Annotated[
        SerializerSettings,
        Field(
            description=(
                "Schema resolution and validation policy shared by the key and\n"
                "value serializers."
            ),
            default_factory=SerializerSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )
