"""
Resolver: drives generation of one IDL document.

Phases run in a fixed order:

    instructions → accounts → types → done

Instruction argument structs are emitted first and seed the unresolved
mapping with every ``defined`` name they reference. The accounts and
types sections are then each scanned once, in document order; a
definition is emitted only if its name is unresolved at the moment the
scan reaches it. Names discovered while emitting a definition are added
to the mapping but never revisited, so a reference to a definition that
the scan has already passed stays unresolved and is reported in the
``done`` phase as a warning.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import GeneratorConfig
from .emitter import emit_discriminator_table, emit_header, emit_struct, emit_typedef
from .idl import Idl, TypeDef
from .naming import to_upper_camel_case

logger = logging.getLogger(__name__)

PHASE_INSTRUCTIONS = "instructions"
PHASE_ACCOUNTS = "accounts"
PHASE_TYPES = "types"
PHASE_DONE = "done"


@dataclass
class Generation:
    """Result of generating one document."""
    code: str
    unresolved: Dict[str, str] = field(default_factory=dict)
    declarations: List[str] = field(default_factory=list)


class Resolver:
    """
    Owns the unresolved mapping (type name → first referrer) and the
    emitted declarations for a single IDL document.
    """

    def __init__(self, idl: Idl, config: Optional[GeneratorConfig] = None):
        self.idl = idl
        self.config = config or GeneratorConfig()
        self.unresolved: Dict[str, str] = {}
        self.declarations: List[str] = []
        self.lines: List[str] = []
        self.phase = PHASE_INSTRUCTIONS

    def _declare(self, name: str):
        if name in self.declarations:
            logger.warning("duplicate declaration: %s (%s phase)", name, self.phase)
        self.declarations.append(name)

    # ── Phases ───────────────────────────────────────────────────────

    def scan_instructions(self):
        self.phase = PHASE_INSTRUCTIONS
        for ix in self.idl.instructions:
            if not ix.args:
                continue
            name = to_upper_camel_case(ix.name)
            self._declare(name)
            self.lines.extend(emit_struct(name, ix.args, self.unresolved,
                                          self.config.derives))

    def scan_definitions(self, defs: List[TypeDef], phase: str):
        """Single pass over one definition section."""
        self.phase = phase
        for typedef in defs:
            if typedef.name not in self.unresolved:
                continue
            logger.debug("resolved %s from %s", typedef.name, phase)
            self._declare(typedef.name)
            self.lines.extend(emit_typedef(typedef, self.unresolved,
                                           self.config.derives))
            # Remove after emitting so a self-reference does not re-add it.
            del self.unresolved[typedef.name]

    def finish(self) -> Dict[str, str]:
        self.phase = PHASE_DONE
        for name, referrer in self.unresolved.items():
            logger.warning("unresolved type: %s (referenced by %s)", name, referrer)
        return dict(self.unresolved)

    # ── Driver ───────────────────────────────────────────────────────

    def run(self) -> Generation:
        self.lines.extend(emit_header(self.idl.address, self.config.imports,
                                      self.config.program_id_name))
        self.lines.extend(emit_discriminator_table(
            self.idl.instructions, self.config.discriminator_namespace))

        self.scan_instructions()
        self.scan_definitions(self.idl.accounts, PHASE_ACCOUNTS)
        self.scan_definitions(self.idl.types, PHASE_TYPES)
        unresolved = self.finish()

        return Generation(code="\n".join(self.lines),
                          unresolved=unresolved,
                          declarations=list(self.declarations))


def generate(idl: Idl, config: Optional[GeneratorConfig] = None) -> Generation:
    """Generate the Rust source unit for one parsed IDL document."""
    return Resolver(idl, config).run()
