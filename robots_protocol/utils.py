# File: robots_protocol/utils.py
"""robots_protocol.utils: Утилиты нормализации значений robots.txt и чтения входных строк."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional, Sequence, Union

from robots_protocol.logger import logger

__all__: Sequence[str] = (
    "BYTE_ORDER_MARK",
    "TextSource",
    "decode_line",
    "iter_lines",
    "normalize_user_agent",
    "normalize_sitemap",
    "parse_int",
)

TextSource = Union[str, bytes, Iterable[Union[str, bytes]]]

BYTE_ORDER_MARK = "\ufeff"
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_SCHEME_SEPARATOR = "://"
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Только CR, LF и CRLF: str.splitlines() режет ещё по \x0b, \x0c, \x85 и \u2028.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def decode_line(line: Union[str, bytes], first: bool = False) -> str:
    """Приводит строку (str или bytes в UTF-8) к str без символов перевода строки.

    Для первой строки источника (*first*) отбрасывает метку порядка байтов (BOM).
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    if first:
        line = line.removeprefix(BYTE_ORDER_MARK)
    return line.rstrip("\r\n")


def iter_lines(data: TextSource) -> Iterator[str]:
    """Разбивает текст, байты или итерируемый источник строк на физические строки.

    Разделителями считаются только CR, LF и CRLF. BOM в начале источника
    отбрасывается независимо от его типа.

    Raises:
        TypeError: если источник не является текстом, байтами или итерируемым.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    if isinstance(data, str):
        lines = _LINE_BREAK_RE.split(data.removeprefix(BYTE_ORDER_MARK))
        if lines[-1] == "":
            lines.pop()
        yield from lines
        return
    try:
        source = iter(data)
    except TypeError:
        raise TypeError(f"Unsupported robots data source: {type(data).__name__}") from None
    for number, line in enumerate(source):
        yield decode_line(line, first=number == 0)


def normalize_user_agent(user_agent: str) -> str:
    """Отбрасывает номер версии (всё начиная с '/') и приводит имя к нижнему регистру."""
    name, _, _version = user_agent.partition("/")
    return name.rstrip().lower()


def normalize_sitemap(sitemap: str) -> Optional[str]:
    """Нормализует URL карты сайта или возвращает None, если он не подходит.

    URL должен содержать схему и непустой путь после хоста. Схема и хост
    приводятся к нижнему регистру, путь и query сохраняют регистр.
    """
    index = sitemap.find(_SCHEME_SEPARATOR)
    if index == -1:
        logger.debug("Sitemap rejected, no scheme: %s", sitemap)
        return None

    index = sitemap.find("/", index + len(_SCHEME_SEPARATOR))
    if index == -1:
        logger.debug("Sitemap rejected, no path: %s", sitemap)
        return None

    path = sitemap[index + 1 :]
    if not path:
        logger.debug("Sitemap rejected, no filename: %s", sitemap)
        return None

    normalized = f"{sitemap[:index].lower()}/{path}"
    logger.debug("Normalized sitemap: %s -> %s", sitemap, normalized)
    return normalized


def parse_int(value: str) -> Optional[int]:
    """Возвращает 32-битное целое из строки или None, если строка не число или вне диапазона."""
    if _INTEGER_RE.fullmatch(value.strip()) is None:
        return None
    number = int(value)
    if not _INT32_MIN <= number <= _INT32_MAX:
        logger.debug("Integer out of range ignored: %s", value.strip())
        return None
    return number
