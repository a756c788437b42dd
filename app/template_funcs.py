from types import MappingProxyType
from typing import List


def split(value: str, separator: str) -> List[str]:
    # str.split(None) quebraria por espaços; aqui o separador é sempre explícito
    if separator == "":
        raise ValueError("split: separador vazio")
    return value.split(separator)


def trim(value: str) -> str:
    return value.strip()


def upper(value: str) -> str:
    return value.upper()


def lower(value: str) -> str:
    return value.lower()


def contains(haystack: str, needle: str) -> bool:
    return needle in haystack


# Registro fixo exposto aos templates; somente leitura
TEMPLATE_FUNCS = MappingProxyType({
    "split": split,
    "trim": trim,
    "upper": upper,
    "lower": lower,
    "contains": contains,
})
