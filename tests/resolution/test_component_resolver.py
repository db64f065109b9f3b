"""Tests for bikeparts/resolution/resolver.py"""

import pytest

from bikeparts.models import (
    BrakeType,
    FrameStyle,
    GroupsetBrand,
    HandlebarType,
    ShifterStyle,
    WheelPreference,
)
from bikeparts.resolution import ComponentResolver, ResolutionStatus


@pytest.fixture
def resolver(catalog):
    return ComponentResolver(catalog)


def only_url(resolution):
    assert resolution.status == ResolutionStatus.RESOLVED
    assert len(resolution.items) == 1
    return resolution.items[0].url


class TestFrame:
    @pytest.mark.parametrize("frame_style,disc,slug", [
        (FrameStyle.ROAD, True, "dolan-rdx-aluminium-disc--frameset"),
        (FrameStyle.ROAD, False, "dolan-preffisio-aluminium-road--frameset"),
        (FrameStyle.TOUR, True, "genesis-fugio-frameset"),
        (FrameStyle.TOUR, False, "genesis-equilibrium-725-frameset"),
        (FrameStyle.GRAVEL, True, "dolan-gxa2020-aluminium-gravel-frameset"),
        (FrameStyle.GRAVEL, False, "dolan-gxa2020-aluminium-gravel-frameset"),
        (FrameStyle.SINGLE_SPEED, True, "dolan-pre-cursa-aluminium-frameset"),
        (FrameStyle.SINGLE_SPEED, False, "dolan-pre-cursa-aluminium-frameset"),
    ])
    def test_frame_grid(self, resolver, make_spec, frame_style, disc, slug):
        spec = make_spec(frame_style=frame_style, disc_brake_compatible=disc)
        assert slug in only_url(resolver.resolve("frame", spec))


class TestHandlebarsAndWheels:
    @pytest.mark.parametrize("handlebar_type,slug", [
        (HandlebarType.DROPS, "prime-primavera-x-light-pro-carbon-handlebar"),
        (HandlebarType.FLAT, "nukeproof-horizon-v2-alloy-riser-handlebar"),
        (HandlebarType.BULLHORNS, "cinelli-bullhorn-road-handlebar"),
        (HandlebarType.FLARE, "ritchey-comp-venturemax-handlebar"),
    ])
    def test_handlebars(self, resolver, make_spec, handlebar_type, slug):
        assert slug in only_url(resolver.resolve("handlebars", make_spec(handlebar_type=handlebar_type)))

    def test_single_speed_wheels_ignore_brakes(self, resolver, make_spec):
        spec = make_spec(
            frame_style=FrameStyle.SINGLE_SPEED,
            brake_type=BrakeType.HYDRAULIC_DISC,
            wheel_preference=WheelPreference.CHEAP,
        )
        assert "halowheels.com" in only_url(resolver.resolve("wheels", spec))

    def test_rim_premium_wheels(self, resolver, make_spec):
        spec = make_spec(wheel_preference=WheelPreference.PREMIUM)
        assert "reynolds-aero-65" in only_url(resolver.resolve("wheels", spec))

    def test_disc_cheap_wheels(self, resolver, make_spec):
        spec = make_spec(brake_type=BrakeType.MECHANICAL_DISC, disc_brake_compatible=True)
        assert "prime-baroudeur-disc" in only_url(resolver.resolve("wheels", spec))


class TestShifters:
    def test_trigger_components_not_applicable_to_sti(self, resolver, make_spec):
        spec = make_spec()
        assert resolver.resolve("trigger_shifter", spec).status == ResolutionStatus.NOT_APPLICABLE
        assert resolver.resolve("brake_levers", spec).status == ResolutionStatus.NOT_APPLICABLE

    def test_sti_shifters_not_applicable_to_trigger(self, resolver, make_spec):
        spec = make_spec(shifter_style=ShifterStyle.TRIGGER, handlebar_type=HandlebarType.FLAT)
        assert resolver.resolve("mechanical_sti_shifter", spec).status == ResolutionStatus.NOT_APPLICABLE
        assert resolver.resolve("hydraulic_sti_shifter", spec).status == ResolutionStatus.NOT_APPLICABLE

    def test_trigger_shifter_fallback(self, resolver, make_spec):
        spec = make_spec(shifter_style=ShifterStyle.TRIGGER, rear_gears=9)
        assert "altus-m2010-9-speed" in only_url(resolver.resolve("trigger_shifter", spec))

    def test_hydraulic_trigger_brake_levers_have_two_labels(self, resolver, make_spec):
        spec = make_spec(shifter_style=ShifterStyle.TRIGGER, brake_type=BrakeType.HYDRAULIC_DISC)
        resolution = resolver.resolve("brake_levers", spec)
        assert [item.label for item in resolution.items] == ["Left Brake-Levers", "Right Brake-Levers"]
        assert len(set(resolution.urls)) == 1

    def test_mechanical_sti_triple_clamps_rear_gears(self, resolver, make_spec):
        spec = make_spec(brake_type=BrakeType.MECHANICAL_DISC, front_gears=3, rear_gears=11)
        resolution = resolver.resolve("mechanical_sti_shifter", spec)
        assert "3x10-speed" in resolution.urls[0]
        assert resolution.patch.rear_gears == 10
        assert "maximum of 10 rear gears" in resolution.note

    def test_mechanical_sti_triple_nine_speed_is_not_patched(self, resolver, make_spec):
        spec = make_spec(front_gears=3, rear_gears=9)
        resolution = resolver.resolve("mechanical_sti_shifter", spec)
        assert resolution.patch is None
        assert "r9-3x9-speed" in resolution.urls[0]

    def test_hydraulic_sti_levers(self, resolver, hydraulic_sti_spec):
        resolution = resolver.resolve("hydraulic_sti_shifter", hydraulic_sti_spec)
        assert [item.label for item in resolution.items] == [
            "Right Hydraulic-Shifter",
            "Left Hydraulic-Shifter",
        ]
        assert all("r7025" in url for url in resolution.urls)

    def test_hydraulic_sti_single_front_left_lever_override(self, resolver, make_spec):
        spec = make_spec(brake_type=BrakeType.HYDRAULIC_DISC, disc_brake_compatible=True, front_gears=1)
        resolution = resolver.resolve("hydraulic_sti_shifter", spec)
        urls = {item.label: item.url for item in resolution.items}
        assert "r7025" in urls["Right Hydraulic-Shifter"]
        assert "grx-820" in urls["Left Hydraulic-Shifter"]


class TestBenignOmissions:
    def test_hydraulic_calipers_omitted(self, resolver, hydraulic_sti_spec):
        resolution = resolver.resolve("brake_calipers", hydraulic_sti_spec)
        assert resolution.status == ResolutionStatus.OMITTED
        assert resolution.items == ()
        assert resolution.note

    def test_rim_calipers_front_and_rear(self, resolver, make_spec):
        resolution = resolver.resolve("brake_calipers", make_spec(rear_gears=11))
        assert [item.label for item in resolution.items] == ["Front Brake-Caliper", "Rear Brake-Caliper"]
        assert all("105-r7000-brake-caliper" in url for url in resolution.urls)

    def test_single_speed_rear_derailleur_omitted(self, resolver, single_speed_spec):
        resolution = resolver.resolve("rear_derailleur", single_speed_spec)
        assert resolution.status == ResolutionStatus.OMITTED

    def test_single_front_gets_chain_catcher(self, resolver, single_speed_spec):
        resolution = resolver.resolve("front_derailleur", single_speed_spec)
        assert "chain-catcher" in only_url(resolution)
        assert resolution.note == "Front derailleur not required, providing chain catcher"

    def test_single_speed_cassette_and_chain_defaults(self, resolver, single_speed_spec):
        assert "single-speed-sprocket" in only_url(resolver.resolve("cassette", single_speed_spec))
        assert "single-speed-chain" in only_url(resolver.resolve("chain", single_speed_spec))


class TestGaps:
    def test_double_eight_speed_chainring_is_unresolved(self, resolver, make_spec):
        resolution = resolver.resolve("chainring", make_spec(front_gears=2, rear_gears=8))
        assert resolution.status == ResolutionStatus.UNRESOLVED
        assert resolution.detail == "No catalogue entry for front_gears=2, rear_gears=8"
        assert resolution.display_name == "Chainring"

    def test_eight_speed_rear_derailleur_is_unresolved(self, resolver, make_spec):
        resolution = resolver.resolve("rear_derailleur", make_spec(rear_gears=8))
        assert resolution.status == ResolutionStatus.UNRESOLVED
        assert "rear_gears=8" in resolution.detail

    def test_unknown_component(self, resolver, make_spec):
        with pytest.raises(ValueError):
            resolver.resolve("saddle", make_spec())

    def test_resolution_is_deterministic(self, resolver, make_spec):
        spec = make_spec(front_gears=3, rear_gears=10)
        assert resolver.resolve("chainring", spec) == resolver.resolve("chainring", spec)


class TestGroupsetPatch:
    def test_shimano_needs_no_patch(self, resolver, make_spec):
        assert resolver.groupset_patch(make_spec()) is None

    def test_uncatalogued_brand_patched_to_shimano(self, resolver, make_spec):
        patch = resolver.groupset_patch(make_spec(groupset_brand=GroupsetBrand.SRAM))
        assert patch.groupset_brand == GroupsetBrand.SHIMANO
        assert patch.reason == "SRAM groupsets are not catalogued, using SHIMANO"
