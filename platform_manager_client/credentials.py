"""
Secret resolution for commands that pass credentials to the platform.

Precedence:
1. a non-empty positional argument, used verbatim
2. the named environment variable, if present (even when empty)
3. an interactive prompt with echo suppressed

An explicit empty positional argument counts as "not provided".
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from platform_manager_client.protocols import OutputSink

logger = logging.getLogger(__name__)


class Provenance(Enum):
    """Where a resolved credential came from."""

    ARGUMENT = "argument"
    ENVIRONMENT = "environment"
    PROMPT = "prompt"


@dataclass(frozen=True)
class CredentialSpec:
    """How to obtain one named secret."""

    name: str
    positional: Optional[str]
    env_var: str
    prompt_label: str


@dataclass(frozen=True)
class Credential:
    name: str
    value: str = field(repr=False)
    provenance: Provenance


def resolve_credential(
    spec: CredentialSpec,
    ui: OutputSink,
    environ: Optional[Mapping[str, str]] = None,
) -> Credential:
    """Resolve a secret once, following the fixed precedence order."""
    env = os.environ if environ is None else environ

    if spec.positional:
        credential = Credential(spec.name, spec.positional, Provenance.ARGUMENT)
    elif spec.env_var in env:
        credential = Credential(spec.name, env[spec.env_var], Provenance.ENVIRONMENT)
    else:
        credential = Credential(spec.name, ui.prompt_secret(spec.prompt_label), Provenance.PROMPT)

    # Never log the value itself
    logger.debug("Resolved credential %s from %s", spec.name, credential.provenance.value)
    return credential
