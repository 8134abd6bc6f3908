"""Infrastructure: consistency gate running the HermiT reasoner JAR."""
from typing import Sequence, Tuple, Optional
from pathlib import Path
import asyncio
import logging
import os
import tempfile

from rdflib import Graph

logger = logging.getLogger(__name__)

HERMIT_JAR = os.path.join("HermiT", "HermiT.jar")
HERMIT_ARGS = ("-k",)

# `-k` reports "<owl:Thing IRI> is satisfiable." or "... is not satisfiable."
FAILURE_MARKERS = ("inconsistent", "unsatisfiable", "not satisfiable")
SUCCESS_MARKERS = ("is consistent", "is satisfiable")


class HermiTReasoner:
    """Consistency checker that delegates to the HermiT JAR."""

    def __init__(self, jar_path: str = HERMIT_JAR, args: Sequence[str] = HERMIT_ARGS) -> None:
        self.jar_path = jar_path
        self.args = tuple(args)

    async def _reason_async(self, owl_path: str, *, timeout: float | None = None) -> Tuple[bool, str]:
        cmd = ["java", "-jar", self.jar_path, *self.args, Path(owl_path).absolute().as_uri()]
        logger.debug("Running %s", " ".join(cmd))
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            return False, f"Reasoner timed out after {timeout} seconds"
        logs = stdout.decode() + stderr.decode()
        lower_logs = logs.lower()
        ok = (
            proc.returncode == 0
            and not any(marker in lower_logs for marker in FAILURE_MARKERS)
            and any(marker in lower_logs for marker in SUCCESS_MARKERS)
        )
        return ok, logs

    def reason(
        self,
        owl_path: str,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        timeout: float | None = None,
    ) -> Tuple[bool, str]:
        """Synchronously run the reasoner on ``owl_path``."""
        if loop is None:
            return asyncio.run(self._reason_async(owl_path, timeout=timeout))
        return loop.run_until_complete(self._reason_async(owl_path, timeout=timeout))

    def check_graph(self, graph: Graph, *, timeout: float | None = None) -> Tuple[bool, str]:
        """Serialize ``graph`` to RDF/XML and check it with HermiT."""
        with tempfile.NamedTemporaryFile(suffix=".owl", delete=False) as tmp:
            tmp_path = tmp.name
        graph.serialize(destination=tmp_path, format="xml")
        try:
            return self.reason(tmp_path, timeout=timeout)
        finally:
            os.unlink(tmp_path)

__all__ = ["HermiTReasoner", "HERMIT_JAR"]
