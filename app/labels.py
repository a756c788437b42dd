"""Renderização das tags de uma notificação a partir dos labels do alerta."""
import re
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

from jinja2 import Template

from .templates import TemplateEvaluationError, render_template

# Separa o texto avaliado em tags: sequências de vírgulas e/ou espaços
_TAG_SEPARATOR = re.compile(r"[,\s]+")


class LabelSet(Mapping):
    """
    Visão somente leitura dos labels, iterada em ordem de chave.

    Chave ausente retorna "" (no Alertmanager label vazio e label ausente
    são equivalentes). Chave que não é string é um erro de avaliação.

    Labels com o mesmo nome de um método (items, keys, values, get) não
    são acessíveis com ponto: `labels.items` é o método. Nos templates use
    `labels["items"]` para esses labels.
    """

    def __init__(self, labels: Dict[str, str]):
        self._labels = dict(sorted(labels.items()))

    @staticmethod
    def _check_key(key):
        if not isinstance(key, str):
            raise TemplateEvaluationError(
                f"Lookup inválido nos labels: chave do tipo {type(key).__name__} ({key!r})"
            )

    def __getitem__(self, key):
        self._check_key(key)
        return self._labels.get(key, "")

    def __contains__(self, key) -> bool:
        return key in self._labels

    def get(self, key, default=None):
        self._check_key(key)
        if key in self._labels:
            return self[key]
        return default

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"LabelSet({self._labels!r})"


def split_tags(text: str) -> List[str]:
    return [part.strip() for part in _TAG_SEPARATOR.split(text) if part.strip()]


def default_tags(labels: Dict[str, str]) -> List[str]:
    return [f"{key} = {value}".strip() for key, value in sorted(labels.items())]


def render_labels(labels: Dict[str, str], template: Optional[Template] = None) -> List[str]:
    """
    Gera a lista ordenada de tags para um alerta.

    Sem template: uma tag "<chave> = <valor>" por label, ordenadas por chave.
    Com template: avalia uma vez com `labels` no contexto e quebra o
    resultado em tags (vírgulas/espaços), descartando segmentos vazios.

    Raises:
        TemplateEvaluationError: se a avaliação do template falhar.
    """
    if template is None:
        return default_tags(labels)

    text = render_template(template, {"labels": LabelSet(labels)})
    return split_tags(text)
