"""Main execution pipeline for building and attaching tag documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cli import RunOptions
from config import Config
from core.errors import InputError, NotFoundError, SerializationError, TransportError
from core.mapping.fields import canonical_categories
from core.matching import build_search_query
from core.models.record import MetadataRecord, ResolvedIdentity
from core.movie_metadata import FieldLimits, aggregate_metadata, skipped_display_names
from core.providers.adapter import CatalogProvider
from core.providers.tmdb.service import init_tmdb
from core.serialization import write_tag_document
from core.services.logging import log_metadata_record
from core.services.tmdb_resolver import resolve_identity
from logger import get_logger
from mkvtoolnix.mkvpropedit import PathToolLocator, ToolLocator, mkvpropedit_attach_tags

log = get_logger()

TAG_DOCUMENT_SUFFIX = ".xml"


@dataclass
class OutputPlan:
    """Where the tag document goes and which container it belongs to."""

    document_path: Path
    container_path: Path | None


@dataclass
class RunResult:
    """Outcome of a successful (or soft-failed) run."""

    identity: ResolvedIdentity
    record: MetadataRecord
    document_path: Path
    document_written: bool
    attached: bool = False
    advisories: list[str] = field(default_factory=list)


def plan_output(destination: Path) -> OutputPlan:
    """Derive the document path from the destination.

    An ``.xml`` destination is the document itself; anything else is treated
    as a container with the document written beside it.
    """
    if destination.suffix.lower() == TAG_DOCUMENT_SUFFIX:
        return OutputPlan(document_path=destination, container_path=None)
    return OutputPlan(document_path=destination.with_suffix(TAG_DOCUMENT_SUFFIX), container_path=destination)


def check_destination(plan: OutputPlan, overwrite: bool) -> None:
    """Validate output paths before any remote call is made.

    Raises:
        InputError: The parent directory is missing or the document exists
            and overwriting is not allowed.
    """
    parent = plan.document_path.parent
    if not parent.is_dir():
        raise InputError(f"Destination directory does not exist: {parent}")
    if not plan.document_path.stem.strip():
        raise InputError(f"Destination has no file name: {plan.document_path}")
    if plan.document_path.exists() and not overwrite:
        raise InputError(f"Tag document already exists (use --overwrite): {plan.document_path}")


def field_limits(cfg: Config) -> FieldLimits:
    """Build credit limits from config."""
    return FieldLimits(
        cast=cfg.metadata.cast_limit,
        writers=cfg.metadata.writer_limit,
        directors=cfg.metadata.director_limit,
        currency_symbol=cfg.metadata.currency_symbol,
    )


def _attach(plan: OutputPlan, cfg: Config, locator: ToolLocator, result: RunResult) -> None:
    if plan.container_path is None or not cfg.output.attach:
        return
    outcome = mkvpropedit_attach_tags(
        cfg.output.mkvpropedit_path,
        plan.container_path,
        plan.document_path,
        locator=locator,
    )
    if not outcome.attached:
        log.warn(f"  ⚠️ {outcome.message}")
        log.info(f"  Tag document kept at {plan.document_path}")
        result.advisories.append(outcome.message)
        return
    result.attached = True
    log.info(f"  ✅ {outcome.message}")
    if cfg.output.keep_xml:
        return
    try:
        plan.document_path.unlink()
    except OSError as exc:
        log.warn(f"  ⚠️ Could not remove {plan.document_path}: {exc}")


def tag_destination(
    options: RunOptions,
    cfg: Config,
    provider: CatalogProvider,
    probe_query: str | None = None,
    locator: ToolLocator | None = None,
) -> RunResult:
    """Resolve, aggregate, serialize and attach tags for one destination.

    Raises:
        InputError: Destination checks failed.
        TransportError: TMDb could not be reached.
        NotFoundError: TMDb had no match for the title.
        SerializationError: The document could not be written and nothing
            usable exists at its path.
    """
    plan = plan_output(options.destination)
    check_destination(plan, cfg.output.overwrite)
    try:
        skip = canonical_categories(cfg.metadata.skip)
    except ValueError as exc:
        raise InputError(str(exc)) from exc

    query = build_search_query(plan.document_path.stem, options.title, options.year)
    log.info(f"Searching TMDb for {query.describe()}")
    identity = resolve_identity(provider, query, probe_query=probe_query)

    if skip:
        log.info(f"  Skipping: {', '.join(skipped_display_names(skip))}")
    record = aggregate_metadata(
        provider,
        identity.tmdb_id,
        skip=skip,
        extra_fields=cfg.metadata.properties,
        limits=field_limits(cfg),
    )
    log_metadata_record(record, label=f"Tags for movie/{identity.tmdb_id}:")

    result = RunResult(identity=identity, record=record, document_path=plan.document_path, document_written=False)
    result.advisories.extend(identity.advisories)
    try:
        write_tag_document(record, plan.document_path, overwrite=cfg.output.overwrite)
    except SerializationError as exc:
        if plan.document_path.exists() and plan.document_path.stat().st_size > 0:
            message = f"{exc}; {plan.document_path} may be partially written."
            log.warn(f"  ⚠️ {message}")
            result.advisories.append(message)
            return result
        raise
    result.document_written = True
    log.info(f"  ✅ Wrote tag document {plan.document_path}")

    _attach(plan, cfg, locator or PathToolLocator(), result)
    return result


def run(
    options: RunOptions,
    cfg: Config,
    provider: CatalogProvider | None = None,
    locator: ToolLocator | None = None,
) -> int:
    """Run the pipeline and translate failures into an exit code.

    Returns:
        0 on success, 1 for remote or write failures, 2 for input errors.
    """
    probe_query = cfg.tmdb.probe_query or None
    try:
        check_destination(plan_output(options.destination), cfg.output.overwrite)
        if provider is None:
            tmdb_ctx, tmdb_error = init_tmdb(cfg)
            if tmdb_error:
                raise InputError(tmdb_error)
            provider = tmdb_ctx.provider
        result = tag_destination(options, cfg, provider, probe_query=probe_query, locator=locator)
    except InputError as exc:
        log.error(f"❌ {exc}")
        return 2
    except NotFoundError as exc:
        log.error(f"❌ {exc}")
        return 1
    except TransportError as exc:
        log.error(f"❌ TMDb request failed: {exc}")
        return 1
    except SerializationError as exc:
        log.error(f"❌ {exc}")
        return 1

    if result.advisories:
        log.info("\nNotes")
        for note in result.advisories:
            log.info(f"- {note}")
    return 0
