"""
Config Service and DTO Unit Tests
"""

import pytest
from pydantic import ValidationError

from mask_sequence.application import (
    ConfigService,
    ConfigType,
    ItemKind,
    ResultStatus,
    RoundExitReport,
    RoundRulesConfig,
    RoundStartParams,
    get_config_service,
)
from mask_sequence.core.round import RoundSummary


class TestConfigService:

    def test_default_round_rules(self, config_service):
        result = config_service.get_round_rules_config()
        assert result.success
        rules = result.data
        assert rules.base_sacrifices == 1
        assert rules.blind_multiplier == 5
        assert rules.small_bet_bonus == 50
        assert rules.expansion_chip_bonus == 5

    def test_unknown_profile_falls_back_to_default(self, config_service):
        assert config_service.get_round_rules_config("missing").data == RoundRulesConfig()

    def test_named_profiles(self, config_service):
        assert config_service.get_round_rules_config("generous").data.base_sacrifices == 3
        assert config_service.get_logging_config("debug").data.log_level == 'DEBUG'

    def test_tier_lookup(self, config_service):
        tier = config_service.get_tier("tier_2").data
        assert (tier.slots, tier.deck_size, tier.cost) == (5, 20, 50)
        assert config_service.get_tier("tutorial").data.slots == 4

    def test_unknown_tier(self, config_service):
        result = config_service.get_tier("tier_9")
        assert not result.success
        assert result.status == ResultStatus.FAILURE
        assert result.error_code == "TIER_NOT_FOUND"

    def test_tier_list_excludes_tutorial(self, config_service):
        tier_ids = [tier.tier_id for tier in config_service.list_tiers().data]
        assert tier_ids == ["tier_1", "tier_2", "tier_3"]

    def test_item_catalogue(self, config_service):
        items = {item.item_id: item for item in config_service.list_items().data}
        assert items["jackpot_amulet"].is_soulbound
        assert items["jackpot_amulet"].kind == ItemKind.PASSIVE
        assert items["void_goggles"].kind == ItemKind.CONSUMABLE
        assert config_service.get_item("nothing").error_code == "ITEM_NOT_FOUND"

    def test_invalid_rules_rejected(self):
        with pytest.raises(ValueError):
            RoundRulesConfig(blind_multiplier=0)

    def test_global_instance(self):
        assert isinstance(get_config_service(), ConfigService)
        assert get_config_service() is get_config_service()


class TestDTOs:

    def test_start_params_to_setup(self):
        params = RoundStartParams(tier_slots=4, tier_deck_size=15, expansion_bonus=5, goggles_granted=True)
        setup = params.to_setup()
        assert setup.tier_slots == 4
        assert setup.expansion_bonus == 5
        assert setup.goggles_granted

    def test_start_params_validation(self):
        with pytest.raises(ValidationError):
            RoundStartParams(tier_slots=0, tier_deck_size=15)
        with pytest.raises(ValidationError):
            RoundStartParams(tier_slots=4, tier_deck_size=15, expansion_bonus=-5)

    def test_lost_report_cannot_have_profit(self):
        with pytest.raises(ValidationError):
            RoundExitReport(won=False, profit=10)

    def test_report_from_summary(self):
        summary = RoundSummary(won=True, profit=73, consumed_goggles=True)
        report = RoundExitReport.from_summary(summary, is_tutorial=True)
        assert report.won
        assert report.profit == 73
        assert report.consumed_goggles
        assert not report.consumed_small_bet
        assert report.is_tutorial


class TestConfigUpdate:

    def test_freedom_cost_follows_rules(self, config_service):
        assert config_service.get_item("freedom_contract").data.cost == 800
        result = config_service.update_config(ConfigType.ROUND_RULES, "default", {'freedom_cost': 500})
        assert result.success
        assert config_service.get_item("freedom_contract").data.cost == 500
        listed = {item.item_id: item.cost for item in config_service.list_items().data}
        assert listed["freedom_contract"] == 500

    def test_invalid_update_keeps_config(self, config_service):
        result = config_service.update_config(ConfigType.ROUND_RULES, "default", {'jackpot_value': 0})
        assert result.error_code == "UPDATE_CONFIG_FAILED"
        assert config_service.get_round_rules_config().data.jackpot_value == 100

    def test_unknown_profile(self, config_service):
        result = config_service.update_config(ConfigType.LOGGING, "verbose", {'log_level': 'DEBUG'})
        assert result.error_code == "CONFIG_PROFILE_NOT_FOUND"

    def test_unknown_key_is_skipped(self, config_service):
        assert config_service.update_config(ConfigType.ROUND_RULES, "default", {'colour': 'red'}).success
        assert config_service.get_round_rules_config().data == RoundRulesConfig()

    def test_tutorial_profile(self, config_service):
        rules = config_service.get_round_rules_config("tutorial").data
        assert rules.base_sacrifices == 3
        assert rules.tutorial_sacrifices == 5
