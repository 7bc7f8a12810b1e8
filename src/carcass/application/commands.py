"""Application commands."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from carcass.application.config import (
    ConfigurationSchema,
    config_to_envelope,
    config_to_material_rates,
    config_to_tree,
)
from carcass.application.dtos import ConfigurationOutput
from carcass.domain import (
    DimensionError,
    PanelDeletionStore,
    hidden_separator_seeds,
    resolve_visibility,
)
from carcass.domain.services import LayoutCache, PricingEngine, encode_descriptor

logger = logging.getLogger(__name__)


class ResolveConfigurationCommand:
    """Command to resolve a saved configuration into panels and a price.

    Segmentation goes through a ``LayoutCache`` so that repeated calls with
    the same tree and envelope reuse the computed segments.
    """

    def __init__(
        self,
        pricing_engine: PricingEngine | None = None,
        layout_cache: LayoutCache | None = None,
    ) -> None:
        self.pricing_engine = pricing_engine or PricingEngine()
        self.layout_cache = layout_cache or LayoutCache()

    def execute(
        self,
        config: ConfigurationSchema,
        sample_prices: Mapping[int, float] | None = None,
        include_price: bool = True,
    ) -> ConfigurationOutput:
        """Execute the command.

        Args:
            config: A schema-valid configuration.
            sample_prices: Material prices per m2 keyed by colour id, used
                when the selection carries no explicit price.
            include_price: Skip pricing when False.

        Returns:
            ConfigurationOutput; ``errors`` is set instead of raising when
            the envelope or the tree cannot be built.
        """
        conversion = config_to_tree(config)
        output = ConfigurationOutput(
            tree=conversion.tree, corrections=list(conversion.corrections)
        )

        try:
            envelope = config_to_envelope(config)
            segments = self.layout_cache.segment(conversion.tree, envelope)
        except DimensionError as e:
            output.errors.append(str(e))
            return output

        deletions = PanelDeletionStore(config.deleted_panel_ids)
        stale = deletions.prune(segment.id for segment in segments)
        if stale:
            logger.warning(f"Ignoring {len(stale)} deleted panel id(s) with no panel")

        visibility = resolve_visibility(segments, deletions, conversion.tree)
        output.envelope = envelope
        output.segments = segments
        output.visibility = visibility
        output.stale_panel_ids = stale
        output.descriptor = encode_descriptor(
            conversion.tree, hidden_separator_seeds(segments, visibility)
        )

        if include_price:
            output.quote = self.pricing_engine.price(
                conversion.tree,
                envelope,
                config_to_material_rates(config.material_selection, sample_prices),
                deletions,
                socle=config.socle,
                global_door=config.door_type,
            )

        logger.debug(
            f"Resolved configuration: {len(segments)} segment(s), "
            f"{len(visibility.hidden)} hidden"
        )
        return output
