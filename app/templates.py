"""Compilação e avaliação dos templates de notificação (Jinja2 em sandbox).

Os templates são compilados uma única vez, no carregamento da configuração,
e reutilizados em todas as renderizações. O ambiente é imutável depois do
import: as funções de template são registradas aqui e nunca alteradas.
"""
from typing import Any, Dict, NamedTuple, Optional

from jinja2 import StrictUndefined, Template, TemplateSyntaxError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from .constants import (
    LABELS_TEMPLATE,
    LABELS_TEMPLATE_FILE,
    LABELS_TEMPLATE_PRESET,
    MESSAGE_TEMPLATE,
    MESSAGE_TEMPLATE_FILE,
    TITLE_TEMPLATE,
    TITLE_TEMPLATE_FILE,
)
from .template_funcs import TEMPLATE_FUNCS


class LabelTemplateError(Exception):
    def __init__(self, message: str, template_name: Optional[str] = None):
        super().__init__(message)
        self.template_name = template_name


class TemplateCompileError(LabelTemplateError):
    """Sintaxe inválida; detectado no carregamento da configuração."""

    def __init__(self, message: str, template_name: Optional[str] = None, lineno: Optional[int] = None):
        super().__init__(message, template_name)
        self.lineno = lineno


class TemplateEvaluationError(LabelTemplateError):
    """Falha durante a renderização (função inválida, lookup incompatível...)."""


_env = ImmutableSandboxedEnvironment(
    autoescape=False,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.globals.update(TEMPLATE_FUNCS)


# Exibe apenas os labels listados em show_labels (valores em maiúsculas);
# sem show_labels, exibe todos os labels exceto o próprio controle.
SHOW_LABELS_TEMPLATE = """\
{%- set show = labels["show_labels"] -%}
{%- if show -%}
  {%- for key in split(show, ",") -%}
    {%- set name = trim(key) -%}
    {%- if name != "show_labels" and labels[name] -%}
      {%- if loop.index0 %}, {% endif -%}
      {{ name }}={{ upper(labels[name]) }}
    {%- endif -%}
  {%- endfor -%}
{%- else -%}
  {%- for key, value in labels.items() if key != "show_labels" -%}
    {{ key }}={{ value }} {% endfor -%}
{%- endif -%}
"""

LABEL_TEMPLATE_PRESETS = {
    "show_labels": SHOW_LABELS_TEMPLATE,
}


class NotificationTemplates(NamedTuple):
    title: Optional[Template] = None
    message: Optional[Template] = None
    labels: Optional[Template] = None


def compile_template(source: Optional[str], name: str = "labels") -> Optional[Template]:
    """
    Compila o template; fonte vazia (ou None) significa "sem template" e
    o chamador usa a renderização padrão.
    """
    if source is None or not source.strip():
        return None
    try:
        code = _env.compile(source, name=name, filename=f"<{name}>")
    except TemplateSyntaxError as exc:
        raise TemplateCompileError(
            f"Template '{name}' inválido (linha {exc.lineno}): {exc.message}",
            template_name=name,
            lineno=exc.lineno,
        ) from exc
    return _env.template_class.from_code(_env, code, _env.make_globals(None))


def load_template(source: Optional[str] = None, path: Optional[str] = None, name: str = "labels") -> Optional[Template]:
    if source:
        return compile_template(source, name)
    if not path:
        return None
    try:
        with open(path, 'r', encoding='utf-8') as fp:
            raw = fp.read()
    except OSError as exc:
        raise TemplateCompileError(f"Falha ao ler template '{name}' de {path}: {exc}", template_name=name) from exc
    return compile_template(raw, name)


def load_notification_templates() -> NotificationTemplates:
    labels_source = LABELS_TEMPLATE
    if not labels_source and not LABELS_TEMPLATE_FILE and LABELS_TEMPLATE_PRESET:
        labels_source = LABEL_TEMPLATE_PRESETS.get(LABELS_TEMPLATE_PRESET)
        if labels_source is None:
            raise TemplateCompileError(
                f"Preset de labels desconhecido: '{LABELS_TEMPLATE_PRESET}' "
                f"(disponíveis: {', '.join(sorted(LABEL_TEMPLATE_PRESETS))})",
                template_name="labels",
            )

    return NotificationTemplates(
        title=load_template(TITLE_TEMPLATE, TITLE_TEMPLATE_FILE, name="title"),
        message=load_template(MESSAGE_TEMPLATE, MESSAGE_TEMPLATE_FILE, name="message"),
        labels=load_template(labels_source, LABELS_TEMPLATE_FILE, name="labels"),
    )


def render_template(template: Template, context: Dict[str, Any]) -> str:
    try:
        return template.render(context)
    except LabelTemplateError as exc:
        if exc.template_name is None:
            exc.template_name = template.name
        raise
    except Exception as exc:
        raise TemplateEvaluationError(
            f"Falha ao avaliar template '{template.name}': {exc}",
            template_name=template.name,
        ) from exc
