"""
Directory conversion with per-input failure isolation.

Every input file is loaded, parsed, modeled, emitted and written on its own;
a failure is recorded in the report and the remaining inputs still run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..logging_config import get_logger
from ..utils import SourceLoaderError, ensure_directory, list_source_files, load_source
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.parser import StructBlock, find_struct, find_structs

logger = get_logger(__name__)


class OutcomeStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ConversionOutcome:
    """Result for one input file, or one struct of it."""

    source: Path
    status: OutcomeStatus
    struct_name: Optional[str] = None
    output_path: Optional[Path] = None
    message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    code: Optional[str] = None


@dataclass
class ConversionReport:
    """Aggregated outcomes of one batch run."""

    outcomes: List[ConversionOutcome] = field(default_factory=list)

    def add(self, outcome: ConversionOutcome) -> None:
        self.outcomes.append(outcome)

    def _with_status(self, status: OutcomeStatus) -> List[ConversionOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> List[ConversionOutcome]:
        return self._with_status(OutcomeStatus.SUCCESS)

    @property
    def skipped(self) -> List[ConversionOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> List[ConversionOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> Dict[str, int]:
        return {s.value: len(self._with_status(s)) for s in OutcomeStatus}


def extract_structs(source: str, all_structs: bool = False) -> List[StructBlock]:
    """Struct blocks to convert from one file: the first one, or all of them."""
    if all_structs:
        return find_structs(source)
    block = find_struct(source)
    return [block] if block else []


def convert_source(
    generator: CodeGenerator, source: str, all_structs: bool = False
) -> List[Tuple[StructBlock, GenerationResult]]:
    """Generate code for the struct(s) of one source text, without writing."""
    return [
        (block, generate_code(generator, block.name, block.body))
        for block in extract_structs(source, all_structs)
    ]


def convert_directory(
    input_dir: str | Path,
    output_dir: str | Path,
    generator: CodeGenerator,
    all_structs: Optional[bool] = None,
    dry_run: bool = False,
) -> ConversionReport:
    """
    Convert every source file in ``input_dir`` and write the artifacts.

    Args:
        input_dir: Directory holding Go source files
        output_dir: Destination directory, created when missing
        generator: Generator producing the artifacts
        all_structs: Convert every struct per file (defaults to the config)
        dry_run: Generate and report without writing files

    Returns:
        ConversionReport with one outcome per struct or skipped/failed file

    Raises:
        SourceLoaderError: If ``input_dir`` cannot be listed
        OutputError: If ``output_dir`` cannot be created
    """
    if all_structs is None:
        all_structs = generator.config.all_structs

    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    logger.info("Reading from input dir: %s", input_dir)

    files = list_source_files(input_dir)
    if not dry_run:
        ensure_directory(output_dir)

    report = ConversionReport()
    claimed: Dict[str, Path] = {}

    for path in files:
        logger.info("Parsing: %s", path)
        try:
            _convert_file(
                generator, path, output_dir, claimed, all_structs, dry_run, report
            )
        except Exception as e:
            logger.exception("Unexpected failure converting %s", path)
            report.add(
                ConversionOutcome(
                    path, OutcomeStatus.FAILED, message=f"{type(e).__name__}: {e}"
                )
            )

    logger.info(
        "Converted %d, skipped %d, failed %d",
        len(report.succeeded),
        len(report.skipped),
        len(report.failed),
    )
    return report


def _convert_file(
    generator: CodeGenerator,
    path: Path,
    output_dir: Path,
    claimed: Dict[str, Path],
    all_structs: bool,
    dry_run: bool,
    report: ConversionReport,
) -> None:
    """Convert the struct(s) of one file, adding outcomes to ``report``."""
    try:
        source = load_source(path)
    except SourceLoaderError as e:
        report.add(ConversionOutcome(path, OutcomeStatus.FAILED, message=str(e)))
        return

    blocks = extract_structs(source, all_structs)
    if not blocks:
        logger.debug("No struct found in %s", path)
        report.add(
            ConversionOutcome(
                path, OutcomeStatus.SKIPPED, message="no struct definition found"
            )
        )
        return

    for block in blocks:
        outcome = _convert_block(generator, path, block, output_dir, claimed, dry_run)
        report.add(outcome)


def _convert_block(
    generator: CodeGenerator,
    path: Path,
    block: StructBlock,
    output_dir: Path,
    claimed: Dict[str, Path],
    dry_run: bool,
) -> ConversionOutcome:
    """Generate and write a single struct, folding every failure into the outcome."""
    result = generate_code(generator, block.name, block.body)
    if not result.success:
        logger.error("%s: %s", path, result.error_message)
        return ConversionOutcome(
            path, OutcomeStatus.FAILED, block.name, message=result.error_message
        )

    for warning in result.warnings:
        logger.warning("%s: %s", path, warning)

    filename = result.metadata["output_file"]
    output_path = output_dir / filename
    if filename in claimed:
        message = (
            f"Output {filename} for struct {block.name} collides with "
            f"{claimed[filename]}; not written"
        )
        logger.error(message)
        return ConversionOutcome(
            path,
            OutcomeStatus.FAILED,
            block.name,
            message=message,
            warnings=result.warnings,
        )
    if not dry_run:
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", output_path, e)
            return ConversionOutcome(
                path,
                OutcomeStatus.FAILED,
                block.name,
                message=f"Failed to write {output_path}: {e}",
                warnings=result.warnings,
            )
        logger.info("Saved to dest dir: %s", output_path)
    claimed[filename] = path

    return ConversionOutcome(
        path,
        OutcomeStatus.SUCCESS,
        block.name,
        output_path=output_path,
        code=result.code,
        warnings=result.warnings,
    )
