import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from schemawire.bootstrap.config.settings import SchemaWireConfig


class FakeSchemaWireConfig(SchemaWireConfig):
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
            YamlConfigSettingsSource(settings_cls, yaml_file=os.environ.get("TEST_SCHEMAWIRECONFIG")),
        )


def frame(schema_id: int, document: bytes) -> bytes:
    return b"\x00" + schema_id.to_bytes(4, "big", signed=True) + document
