import asyncio
import json
import sys
from typing import TextIO

from schemawire.bootstrap.config.loader import get_cli_args
from schemawire.bootstrap.config.settings import SchemaWireConfig
from schemawire.bootstrap.deps import get_config, load_schema, open_record_serializer
from schemawire.core.errors import SerdeError
from schemawire.core.helpers.utils import setup_logging
from schemawire.core.models.schema import JsonSchema


async def frame_lines(
    config: SchemaWireConfig,
    schema: JsonSchema,
    topic: str,
    is_key: bool,
    source: TextIO,
    sink: TextIO,
) -> None:
    async with open_record_serializer(config, schema) as record_serializer:
        serializer = record_serializer.for_key if is_key else record_serializer.for_value

        for line in source:
            line = line.strip()
            if not line:
                continue
            data = await serializer.serialize(topic, json.loads(line))
            # null values are tombstones: nothing is framed
            sink.write((data.hex() if data is not None else "") + "\n")


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    config = get_config()

    try:
        schema = load_schema(cli.schema)
        asyncio.run(frame_lines(config, schema, cli.topic, cli.key, sys.stdin, sys.stdout))
    except (SerdeError, ValueError) as ex:
        # ValueError covers undecodable lines and NaN or Infinity values
        print(f"error: {ex}", file=sys.stderr)
        raise SystemExit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
