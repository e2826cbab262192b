"""
Reader for the configuration blocks of a Prisma schema.

Only `generator` and `datasource` blocks are interpreted, every other
top-level block (models, enums, composite types and views) is skipped.

Values the reader does not understand, e.g. `postgis(version: "2.1")` in a
datasource's `extensions`, are kept as written. Only a malformed block
structure is an error.
"""

from __future__ import annotations

import re
import json
import logging
from typing import Any, List, Union, Iterator

from pydantic import ValidationError

from .models import EnvValue, SchemaConfig, GeneratorConfig, DatasourceConfig
from ..errors import SchemaParseError


__all__ = ('parse_config',)

log: logging.Logger = logging.getLogger(__name__)

BLOCK_HEADER = re.compile(r'^(?P<kind>[A-Za-z]+)\s+(?P<name>[A-Za-z_]\w*)\s*\{$')
ASSIGNMENT = re.compile(r'^(?P<key>[A-Za-z_]\w*)\s*=\s*(?P<value>.+)$')
ENV_CALL = re.compile(r'^env\(\s*(?P<arg>"(?:[^"\\]|\\.)*")\s*\)$')

CONFIG_BLOCKS = {'generator', 'datasource'}

Value = Union[str, bool, EnvValue, List[Any]]


def parse_config(datamodel: str) -> SchemaConfig:
    """Parse the generator and datasource blocks of a schema into a `SchemaConfig`"""
    generators: list[GeneratorConfig] = []
    datasources: list[DatasourceConfig] = []
    seen: set[tuple[str, str]] = set()

    lines = _iter_lines(datamodel)
    for lineno, line in lines:
        if not line:
            continue

        header = BLOCK_HEADER.match(line)
        if header is None:
            raise SchemaParseError(f'Unexpected {line!r} outside of a block', line=lineno)

        kind = header.group('kind')
        name = header.group('name')
        if kind not in CONFIG_BLOCKS:
            _skip_block(lines, start=lineno)
            continue

        if (kind, name) in seen:
            raise SchemaParseError(f'The {kind} {name!r} is defined more than once', line=lineno)
        seen.add((kind, name))

        fields = _parse_block(lines, kind=kind, start=lineno)
        if kind == 'generator':
            generators.append(_build_generator(name, fields, line=lineno))
        else:
            datasources.append(_build_datasource(name, fields, line=lineno))

    log.debug('Parsed %d generator(s) and %d datasource(s)', len(generators), len(datasources))
    return SchemaConfig(generators=generators, datasources=datasources)


def _iter_lines(datamodel: str) -> Iterator[tuple[int, str]]:
    for lineno, line in enumerate(datamodel.splitlines(), start=1):
        yield lineno, _strip_comment(line).strip()


def _strip_comment(line: str) -> str:
    in_string = False
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == '\\' and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif char == '/' and not in_string and line.startswith('//', index):
            return line[:index]
    return line


def _count_outside_strings(line: str, chars: str) -> dict[str, int]:
    counts = {char: 0 for char in chars}
    in_string = False
    escaped = False
    for char in line:
        if escaped:
            escaped = False
        elif char == '\\' and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif not in_string and char in counts:
            counts[char] += 1
    return counts


def _skip_block(lines: Iterator[tuple[int, str]], *, start: int) -> None:
    depth = 1
    for _, line in lines:
        counts = _count_outside_strings(line, '{}')
        depth += counts['{'] - counts['}']
        if depth <= 0:
            return

    raise SchemaParseError('Unterminated block', line=start)


def _parse_block(
    lines: Iterator[tuple[int, str]],
    *,
    kind: str,
    start: int,
) -> dict[str, tuple[Value, int]]:
    fields: dict[str, tuple[Value, int]] = {}
    for lineno, line in lines:
        if not line:
            continue

        if line == '}':
            return fields

        match = ASSIGNMENT.match(line)
        if match is None:
            raise SchemaParseError(f'Expected a key-value pair in {kind} block, got {line!r}', line=lineno)

        key = match.group('key')
        if key in fields:
            raise SchemaParseError(f'Duplicate key {key!r} in {kind} block', line=lineno)

        text = match.group('value').strip()
        if text.startswith('['):
            text = _collect_array(text, lines, start=lineno)

        fields[key] = (_parse_value(text, line=lineno), lineno)

    raise SchemaParseError(f'Unterminated {kind} block', line=start)


def _collect_array(text: str, lines: Iterator[tuple[int, str]], *, start: int) -> str:
    parts = [text]
    counts = _count_outside_strings(text, '[]')
    depth = counts['['] - counts[']']
    while depth > 0:
        try:
            _, line = next(lines)
        except StopIteration:
            raise SchemaParseError('Unterminated array', line=start) from None

        parts.append(line)
        counts = _count_outside_strings(line, '[]')
        depth += counts['['] - counts[']']

    return ' '.join(parts)


def _parse_value(text: str, *, line: int) -> Value:
    if text.startswith('"'):
        return _parse_string(text, line=line)

    if text.startswith('['):
        if not text.endswith(']'):
            raise SchemaParseError(f'Invalid array {text!r}', line=line)
        return [_parse_value(item, line=line) for item in _split_items(text[1:-1], line=line)]

    match = ENV_CALL.match(text)
    if match is not None:
        return EnvValue(from_env_var=_parse_string(match.group('arg'), line=line))

    if text in ('true', 'false'):
        return text == 'true'

    # identifiers and call expressions such as `postgis(version: "2.1")`
    return text


def _parse_string(text: str, *, line: int) -> str:
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        raise SchemaParseError(f'Invalid string literal {text}', line=line) from None

    if not isinstance(value, str):
        raise SchemaParseError(f'Invalid string literal {text}', line=line)

    return value


def _split_items(text: str, *, line: int) -> list[str]:
    items: list[str] = []
    current: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == '\\' and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif in_string:
            pass
        elif char in '([{':
            depth += 1
        elif char in ')]}':
            depth -= 1
        elif char == ',' and depth == 0:
            items.append(''.join(current).strip())
            current = []
            continue
        current.append(char)

    # trailing commas are allowed
    last = ''.join(current).strip()
    if last:
        items.append(last)

    if any(not item for item in items):
        raise SchemaParseError(f'Empty item in array [{text}]', line=line)

    return items


def _expect_env_value(key: str, value: Value, *, line: int) -> EnvValue:
    if isinstance(value, EnvValue):
        return value
    if isinstance(value, str):
        return EnvValue(value=value)
    raise SchemaParseError(f'Expected {key!r} to be a string or env() call', line=line)


def _expect_string_list(key: str, value: Value, *, line: int) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SchemaParseError(f'Expected {key!r} to be a list of strings', line=line)
    return value


def _expect_env_list(key: str, value: Value, *, line: int) -> list[EnvValue]:
    # binaryTargets = env("TARGETS") is a single value
    if isinstance(value, list):
        return [_expect_env_value(key, item, line=line) for item in value]
    return [_expect_env_value(key, value, line=line)]


def _to_text(value: Value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, EnvValue):
        return f'env({json.dumps(value.from_env_var)})'
    if isinstance(value, list):
        return '[' + ', '.join(_to_text(item) for item in value) + ']'
    return value


def _build_generator(name: str, fields: dict[str, tuple[Value, int]], *, line: int) -> GeneratorConfig:
    fields = dict(fields)
    if 'provider' not in fields:
        raise SchemaParseError(f'The generator {name!r} is missing a provider', line=line)

    provider, provider_line = fields.pop('provider')
    options: dict[str, Any] = {
        'name': name,
        'provider': _expect_env_value('provider', provider, line=provider_line),
    }

    if 'output' in fields:
        output, output_line = fields.pop('output')
        options['output'] = _expect_env_value('output', output, line=output_line)

    if 'previewFeatures' in fields:
        features, features_line = fields.pop('previewFeatures')
        options['preview_features'] = _expect_string_list('previewFeatures', features, line=features_line)

    if 'binaryTargets' in fields:
        targets, targets_line = fields.pop('binaryTargets')
        options['binary_targets'] = _expect_env_list('binaryTargets', targets, line=targets_line)

    extra: dict[str, Union[str, list[str]]] = {}
    for key, (value, _) in fields.items():
        if isinstance(value, list):
            extra[key] = [_to_text(item) for item in value]
        else:
            extra[key] = _to_text(value)

    options['config'] = extra
    return _validate(GeneratorConfig, options, line=line)


def _build_datasource(name: str, fields: dict[str, tuple[Value, int]], *, line: int) -> DatasourceConfig:
    # options other than the provider and the url, e.g. `extensions`, are not read
    if 'provider' not in fields:
        raise SchemaParseError(f'The datasource {name!r} is missing a provider', line=line)

    provider, provider_line = fields['provider']
    if not isinstance(provider, str):
        raise SchemaParseError('Expected the datasource provider to be a string', line=provider_line)

    options: dict[str, Any] = {'name': name, 'provider': provider}
    if 'url' in fields:
        url, url_line = fields['url']
        options['url'] = _expect_env_value('url', url, line=url_line)

    return _validate(DatasourceConfig, options, line=line)


def _validate(model: Any, options: dict[str, Any], *, line: int) -> Any:
    try:
        return model.model_validate(options)
    except ValidationError as exc:
        raise SchemaParseError(str(exc), line=line) from exc
