"""
Resolution Orchestrator

Runs one resolution for a bike specification:

1. Pre-pass - resolve the components whose rules may patch the
   specification (shifters, levers, chainring), one at a time, applying
   each patch before the next component reads the specification.
2. Fan-out - one task per component on a thread pool. Pre-pass components
   only fetch; the rest resolve against the final specification, then fetch.
3. Join - the pool is drained before aggregation; a failed task never
   cancels its siblings.
4. Aggregate - parts and errors become the BillOfMaterials.

The pool is created only after the pre-pass returns and the specification
is an immutable value, so fan-out tasks cannot observe a pre-clamp gear count.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..common.config_loader import load_settings
from ..extraction import (
    ExtractionProfile,
    PartLookupError,
    ResolveError,
    extract,
    get_profile_for_url,
    load_profiles,
)
from ..models import BikeSpecification, BillOfMaterials, ErrorStage, Part, ResolutionError
from .aggregator import BillOfMaterialsAggregator, Outcome
from .catalog import PartCatalog
from .resolver import ComponentResolver, Resolution, ResolutionStatus

logger = logging.getLogger(__name__)


@dataclass
class ComponentResult:
    """Everything one fan-out task produced."""
    component: str
    outcomes: List[Outcome] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


class PartsOrchestrator:
    """
    Resolves a BikeSpecification into a BillOfMaterials.

    Usage:
        orchestrator = PartsOrchestrator()
        bill = orchestrator.build(spec)
    """

    def __init__(
        self,
        catalog: Optional[PartCatalog] = None,
        profiles: Optional[Dict[str, ExtractionProfile]] = None,
        settings: Optional[Dict[str, Any]] = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            catalog: Part catalogue (loaded from config/ if None)
            profiles: Vendor extraction profiles (loaded from config/ if None)
            settings: Runtime settings (loaded from config/ and env if None)
            session: Shared HTTP session; a fresh one is created per run if None
        """
        self.catalog = catalog or PartCatalog.load()
        self.profiles = profiles if profiles is not None else load_profiles()
        self.settings = settings or load_settings()
        self.resolver = ComponentResolver(self.catalog)
        self.aggregator = BillOfMaterialsAggregator(
            currency_symbol=self.settings.get("currency_symbol", "£")
        )
        self._session = session

    def build(self, spec: BikeSpecification) -> BillOfMaterials:
        """
        Resolve every component of the bike and price it.

        Never raises for component-level failures: each becomes a
        ResolutionError on the returned bill.
        """
        logger.info("Resolving parts for %s", spec.to_dict())

        spec, prepass_resolutions, notes = self.run_prepass(spec)

        session = self._session or self._create_session()
        try:
            results = self._fan_out(spec, prepass_resolutions, session)
        finally:
            if session is not self._session:
                session.close()

        outcomes: List[Outcome] = []
        for result in results:
            outcomes.extend(result.outcomes)
            notes.extend(result.notes)

        return self.aggregator.aggregate(outcomes, spec, notes)

    def run_prepass(self, spec: BikeSpecification) -> Tuple[BikeSpecification, List[Resolution], List[str]]:
        """
        Resolve the patching components sequentially and apply their patches.

        Passes repeat until the specification stops changing, so a component
        resolved before a later clamp is re-resolved against the clamped value.

        Returns:
            (final specification, pre-pass resolutions, notes)
        """
        notes: List[str] = []

        brand_patch = self.resolver.groupset_patch(spec)
        if brand_patch:
            logger.warning(brand_patch.reason)
            notes.append(brand_patch.reason)
            spec = spec.apply_patch(brand_patch)

        resolutions: List[Resolution] = []
        # A pass either changes nothing or clamps a field, so this terminates
        for _ in range(len(self.catalog.prepass) + 1):
            start = spec
            resolutions = []
            for component in self.catalog.prepass:
                resolution = self.resolver.resolve(component, spec)
                patched = spec.apply_patch(resolution.patch)
                if patched != spec:
                    logger.warning(
                        "%s: %s (%s)",
                        resolution.display_name,
                        resolution.patch.reason or "specification patched",
                        resolution.patch.changes(),
                    )
                    spec = patched
                resolutions.append(resolution)
            if spec == start:
                break

        return spec, resolutions, notes

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(self.settings.get("headers") or {})
        return session

    def _fan_out(
        self,
        spec: BikeSpecification,
        prepass_resolutions: List[Resolution],
        session: requests.Session,
    ) -> List[ComponentResult]:
        """Run one task per component and wait for all of them."""
        max_workers = int(self.settings.get("max_workers", 10))

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="part") as executor:
            submitted = []
            for resolution in prepass_resolutions:
                future = executor.submit(self._price_resolution, resolution, session)
                submitted.append((resolution.component, future))
            for component in self.catalog.fan_out_components:
                future = executor.submit(self._resolve_and_price, component, spec, session)
                submitted.append((component, future))

            results = []
            for component, future in submitted:
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.exception("Unexpected failure resolving %s", component)
                    error = ResolutionError(
                        component=self.catalog.table(component).display_name,
                        stage=ErrorStage.FETCH,
                        detail=f"Unexpected error: {type(e).__name__}: {str(e)[:100]}",
                    )
                    results.append(ComponentResult(component, outcomes=[error]))

        return results

    def _resolve_and_price(
        self, component: str, spec: BikeSpecification, session: requests.Session
    ) -> ComponentResult:
        resolution = self.resolver.resolve(component, spec)
        return self._price_resolution(resolution, session)

    def _price_resolution(self, resolution: Resolution, session: requests.Session) -> ComponentResult:
        """Turn a resolution into parts, errors and notes, fetching each vendor link once."""
        result = ComponentResult(resolution.component)

        if resolution.status == ResolutionStatus.NOT_APPLICABLE:
            return result

        if resolution.status == ResolutionStatus.OMITTED:
            note = resolution.note or f"{resolution.display_name} not required"
            logger.info("Omitting %s: %s", resolution.display_name, note)
            result.notes.append(note)
            return result

        if resolution.status == ResolutionStatus.UNRESOLVED:
            logger.error("Could not resolve %s: %s", resolution.display_name, resolution.detail)
            result.outcomes.append(_to_resolution_error(resolution.display_name, ResolveError(resolution.detail)))
            return result

        if resolution.note:
            logger.info("%s: %s", resolution.display_name, resolution.note)
            result.notes.append(resolution.note)

        fetched: Dict[str, Any] = {}
        for item in resolution.items:
            if item.url not in fetched:
                try:
                    fetched[item.url] = self._fetch_product(item.url, session)
                except PartLookupError as e:
                    logger.error(
                        "%s failed at %s for %s: %s", item.label, e.stage.value, item.url, e
                    )
                    fetched[item.url] = e

            product = fetched[item.url]
            if isinstance(product, PartLookupError):
                result.outcomes.append(_to_resolution_error(item.label, product, item.url))
            else:
                result.outcomes.append(Part(
                    label=item.label,
                    name=product.name,
                    price=product.price,
                    url=item.url,
                ))

        return result

    def _fetch_product(self, url: str, session: requests.Session):
        profile = get_profile_for_url(url, self.profiles)
        return extract(
            url,
            profile,
            session=session,
            timeout=self.settings.get("fetch_timeout", 5),
            headers=self.settings.get("headers"),
        )


def _to_resolution_error(component: str, error: PartLookupError, url: Optional[str] = None) -> ResolutionError:
    return ResolutionError(
        component=component,
        stage=error.stage,
        detail=str(error),
        url=error.url or url,
    )


def resolve_parts_for_specification(
    spec: BikeSpecification,
    orchestrator: Optional[PartsOrchestrator] = None,
) -> BillOfMaterials:
    """
    Resolve a bike specification into a priced bill of materials.

    Args:
        spec: Bike specification for this request
        orchestrator: Configured orchestrator (a default one is built if None)

    Returns:
        BillOfMaterials, always; errors are carried on the bill
    """
    return (orchestrator or PartsOrchestrator()).build(spec)
