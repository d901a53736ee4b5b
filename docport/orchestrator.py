"""Batch orchestration: concurrent analysis, partitioned transactional commits."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .classifier import Ineligible, MEMBER_FINDING, TYPE_FINDING
from .config import DocportConfig, RunContext
from .errors import CommitError
from .frontends import CSharpDeclarationSource, DeclarationSource
from .git.publisher import Publisher
from .logging import get_logger
from .models import Declaration, Edit, Finding
from .planner import EditPlanner
from .project_scanner import ProjectScanner
from .resolver import FindingResolver
from .stores.doc_store import DocumentationStore
from .workspace import SourceWorkspace

PARTITION_ORDER: Tuple[str, ...] = (TYPE_FINDING, MEMBER_FINDING)
REPORT_PATH = Path(".docport") / "last-run.json"

_INELIGIBLE = "ineligible"
_SKIPPED = "skipped"
_FOUND = "found"


@dataclass
class RunReport:
    """Counts for one orchestrated run."""

    applied: int = 0
    planned: int = 0
    skipped: int = 0
    ambiguous: int = 0
    ineligible: int = 0
    failed_partitions: List[str] = field(default_factory=list)
    cancelled: bool = False
    dry_run: bool = False

    @property
    def fixed(self) -> int:
        return self.planned if self.dry_run else self.applied

    def merge(self, other: "RunReport") -> None:
        self.applied += other.applied
        self.planned += other.planned
        self.skipped += other.skipped
        self.ambiguous += other.ambiguous
        self.ineligible += other.ineligible
        self.failed_partitions.extend(other.failed_partitions)
        self.cancelled = self.cancelled or other.cancelled
        self.dry_run = self.dry_run or other.dry_run


class BatchOrchestrator:
    """Turns a declaration stream into committed include references.

    Declarations are analysed concurrently; findings are grouped by finding
    kind and every group is committed as a single transaction. A group whose
    commit fails is reported and the remaining groups still run.
    """

    def __init__(
        self,
        resolver: FindingResolver,
        workspace: SourceWorkspace,
        *,
        planner: EditPlanner | None = None,
        workers: int = 8,
        dry_run: bool = False,
    ) -> None:
        self.resolver = resolver
        self.workspace = workspace
        self.planner = planner or EditPlanner()
        self.workers = max(1, workers)
        self.dry_run = dry_run
        self.logger = get_logger("orchestrator")

    def run(
        self,
        declarations: Iterable[Declaration],
        *,
        should_stop: Callable[[], bool] | None = None,
    ) -> RunReport:
        report = RunReport(dry_run=self.dry_run)
        outcomes = self._analyse(list(declarations))

        partitions: Dict[str, List[Finding]] = {}
        seen: set[Tuple[Path, int]] = set()
        for status, finding in outcomes:
            if status == _INELIGIBLE:
                report.ineligible += 1
                continue
            if status == _SKIPPED or finding is None:
                report.skipped += 1
                continue
            location = finding.declaration.location
            key = (Path(location.path).resolve(), location.offset)
            if key in seen:
                continue
            seen.add(key)
            if finding.ambiguous:
                report.ambiguous += 1
            partitions.setdefault(finding.kind, []).append(finding)

        # Plan against the loaded text before anything is committed.
        planned = [(kind, self._plan(partitions[kind])) for kind in self._partition_order(partitions)]

        for kind, edits in planned:
            if should_stop is not None and should_stop():
                self.logger.warning("Run cancelled before the %s partition", kind)
                report.cancelled = True
                break
            report.planned += len(edits)
            if self.dry_run:
                self.logger.info("Planned %d %s-level reference(s) (dry-run)", len(edits), kind)
                continue
            self.logger.info("Applying %d %s-level reference(s)", len(edits), kind)
            try:
                applied = self.workspace.apply(edits)
            except CommitError as exc:
                self.logger.error("Could not apply %s-level references: %s", kind, exc)
                report.failed_partitions.append(kind)
                continue
            report.applied += applied
        return report

    def _analyse(self, declarations: Sequence[Declaration]) -> List[Tuple[str, Optional[Finding]]]:
        if self.workers == 1 or len(declarations) < 2:
            return [self._analyse_one(declaration) for declaration in declarations]
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="docport-analyse") as executor:
            return list(executor.map(self._analyse_one, declarations))

    def _analyse_one(self, declaration: Declaration) -> Tuple[str, Optional[Finding]]:
        verdict = self.resolver.classifier.classify(declaration)
        if isinstance(verdict, Ineligible):
            return _INELIGIBLE, None
        finding = self.resolver.resolve_eligible(declaration, verdict)
        if finding is None:
            return _SKIPPED, None
        return _FOUND, finding

    def _plan(self, findings: Sequence[Finding]) -> List[Edit]:
        return [
            self.planner.plan(
                finding.declaration,
                finding.pointer,
                self.workspace.original(finding.declaration.location.path),
            )
            for finding in findings
        ]

    @staticmethod
    def _partition_order(partitions: Dict[str, List[Finding]]) -> List[str]:
        ordered = [kind for kind in PARTITION_ORDER if kind in partitions]
        ordered.extend(sorted(kind for kind in partitions if kind not in PARTITION_ORDER))
        return ordered


class Orchestrator:
    """Runs docport over every configured project."""

    def __init__(
        self,
        source: DeclarationSource | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        self.source = source
        self.publisher = publisher
        self.logger = get_logger("orchestrator")

    def run(
        self,
        config: DocportConfig,
        *,
        dry_run: bool = False,
        should_stop: Callable[[], bool] | None = None,
    ) -> Dict[Path, RunReport]:
        reports: Dict[Path, RunReport] = {}
        for context in config.contexts():
            if should_stop is not None and should_stop():
                self.logger.warning("Run cancelled before project %s", context.project.root)
                break
            report, touched = self.run_project(context, dry_run=dry_run, should_stop=should_stop)
            reports[context.project.root] = report
            if not dry_run and touched:
                self._maybe_commit(context, touched, config)
        return reports

    def run_project(
        self,
        context: RunContext,
        *,
        dry_run: bool = False,
        should_stop: Callable[[], bool] | None = None,
    ) -> Tuple[RunReport, List[Path]]:
        """Process one project and return its report plus the files it touched."""
        project = context.project
        self.logger.info("Loading project %s", project.root)
        workspace = SourceWorkspace()
        declarations = self._load_declarations(context, workspace)
        self.logger.info(
            "Finished loading %d file(s), %d declaration(s)", len(workspace.paths), len(declarations)
        )

        store = DocumentationStore(
            project.docs_root,
            context.legacy_docs_root,
            context.namespace_map,
            read_only=dry_run,
        )
        batch = BatchOrchestrator(
            FindingResolver(store),
            workspace,
            workers=context.workers,
            dry_run=dry_run,
        )
        report = batch.run(declarations, should_stop=should_stop)
        self.logger.info(
            "Project %s: fixed %d, skipped %d, ambiguous %d",
            project.root,
            report.fixed,
            report.skipped,
            report.ambiguous,
        )
        self._write_report(project.root, report, copied=len(store.created))
        return report, [*workspace.modified, *store.created]

    def _load_declarations(self, context: RunContext, workspace: SourceWorkspace) -> List[Declaration]:
        source = self.source or CSharpDeclarationSource()
        scanner = ProjectScanner(context.exclude_paths)
        declarations: List[Declaration] = []
        for path in scanner.scan(context.project.root):
            if not source.supports(path):
                continue
            try:
                text = workspace.load(path)
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Skipping %s: %s", path, exc)
                continue
            declarations.extend(source.declarations(path.resolve(), text))
        return declarations

    def _maybe_commit(self, context: RunContext, files: Sequence[Path], config: DocportConfig) -> None:
        publish = config.publish
        if publish is None or publish.mode != "commit":
            return
        publisher = self.publisher or Publisher()
        self.logger.info("Committing edits via publisher")
        publisher.commit(context.project.root, files, message=publish.message)

    def _write_report(self, root: Path, report: RunReport, *, copied: int) -> None:
        payload = asdict(report)
        payload["fixed"] = report.fixed
        payload["artifacts_copied"] = copied
        payload["generated_at"] = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        path = root / REPORT_PATH
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            self.logger.debug("Could not write run report %s: %s", path, exc)


__all__ = ["BatchOrchestrator", "Orchestrator", "PARTITION_ORDER", "REPORT_PATH", "RunReport"]
