from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from action_dispatch.contracts.results import ActionResult

logger = logging.getLogger(__name__)

TextSink = Callable[[str, str], None]


@dataclass
class Jinja2TextReceiverConfig:
    # action -> template source
    templates: Mapping[str, str]


class Jinja2TextReceiver:
    """
    Receiver that renders one Jinja2 template per action and hands the text to a sink.
    No external IO; render problems come back as failure results.
    """

    def __init__(self, cfg: Jinja2TextReceiverConfig, sink: TextSink) -> None:
        self._cfg = cfg
        self._sink = sink
        self._env = Environment(undefined=StrictUndefined, autoescape=False)
        self._compiled: dict[str, Template] = {}

    def accepted_actions(self) -> List[str]:
        return list(self._cfg.templates.keys())

    def receive_action(self, action: str, payload: Any) -> ActionResult[str]:
        tpl_src = self._cfg.templates.get(action)
        if tpl_src is None:
            return ActionResult.fail("template_not_found", f"Template for '{action}' not found")

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            return ActionResult.fail(
                "bad_payload",
                "Payload must be a mapping",
                {"payload_type": type(payload).__name__},
            )
        bad_keys = [k for k in payload if not isinstance(k, str)]
        if bad_keys:
            return ActionResult.fail(
                "bad_payload",
                "Payload keys must be strings",
                {"bad_keys": [repr(k) for k in bad_keys]},
            )

        try:
            text = self._template(action, tpl_src).render(**dict(payload))
        except TemplateError as exc:
            logger.debug("Render failed action=%s error=%s", action, exc)
            return ActionResult.fail("render_failed", str(exc))

        self._sink(action, text)
        return ActionResult.ok(text)

    def _template(self, action: str, tpl_src: str) -> Template:
        template = self._compiled.get(action)
        if template is None:
            template = self._env.from_string(tpl_src)
            self._compiled[action] = template
        return template
