"""
Unit tests for the executive summary generator and the status helpers it
shares with notification rendering.
"""

import pytest

from drift_engine.config import DriftConfig
from drift_engine.engine.legacy import LegacyEngine
from drift_engine.engine.revenue import RevenueEngine
from drift_engine.engine.summary import (
    GENERIC_HEADLINE,
    MISSING,
    NEXT_STEPS,
    STABLE_HEADLINE,
    build_drivers,
    build_headline,
    compute_confidence,
    estimate_monthly_impact,
    executive_summary,
    format_money_cents,
    format_pct,
    next_steps_for,
)
from drift_engine.models.drift import DriftReason
from drift_engine.models.enums import Confidence, DriftStatus, EmailStatus
from drift_engine.notifications.status import cap_reasons, normalize_status, status_for_email
from tests.conftest import make_legacy_input, make_revenue_input, make_revenue_result


# ============================================================================
# Formatting
# ============================================================================


class TestFormatting:
    """Test display formatting of ratios and currency."""

    def test_format_pct(self):
        """Test ratios render with one decimal."""
        assert format_pct(0.125) == "12.5%"
        assert format_pct(0.09) == "9.0%"

    def test_format_pct_missing(self):
        """Test missing ratios render as the placeholder."""
        assert format_pct(None) == MISSING

    def test_format_money_negative(self):
        """Test negative amounts render with a leading minus sign."""
        assert format_money_cents(-500_000) == "-$5,000.00"

    def test_format_money_positive_thousands(self):
        """Test thousands separators and cents."""
        assert format_money_cents(123_456_789) == "$1,234,567.89"

    def test_format_money_missing(self):
        """Test missing amounts render as the placeholder."""
        assert format_money_cents(None) == MISSING


# ============================================================================
# Status helpers
# ============================================================================


class TestStatusHelpers:
    """Test status normalization at the rendering boundary."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("attention", DriftStatus.ATTENTION),
            (" Softening ", DriftStatus.SOFTENING),
            (DriftStatus.WATCH, DriftStatus.WATCH),
            (EmailStatus.ATTENTION, DriftStatus.ATTENTION),
            (EmailStatus.SOFTENING, DriftStatus.SOFTENING),
            ("bogus", DriftStatus.STABLE),
            (None, DriftStatus.STABLE),
        ],
    )
    def test_normalize_status(self, raw, expected):
        """Test lenient parsing; unknown values read as stable."""
        assert normalize_status(raw) == expected

    def test_watch_maps_to_softening(self):
        """Test templates never see the watch state."""
        assert status_for_email("watch") == EmailStatus.SOFTENING

    def test_attention_passes_through(self):
        """Test known email states are kept."""
        assert status_for_email(DriftStatus.ATTENTION) == EmailStatus.ATTENTION

    def test_email_status_round_trips(self):
        """Test an email status maps back onto itself."""
        for status in EmailStatus:
            assert status_for_email(status) == status

    def test_cap_reasons_keeps_first_three(self):
        """Test reasons are capped in insertion order."""
        reasons = [DriftReason(code=f"R{i}") for i in range(5)]
        assert [r.code for r in cap_reasons(reasons)] == ["R0", "R1", "R2"]

    def test_cap_reasons_handles_none(self):
        """Test a missing reason list caps to nothing."""
        assert cap_reasons(None) == []


# ============================================================================
# Summary parts
# ============================================================================


class TestHeadline:
    """Test headline selection."""

    def test_stable_headline(self):
        """Test stable results use the fixed headline."""
        assert build_headline(DriftStatus.STABLE, []) == STABLE_HEADLINE

    def test_first_reason_detail(self):
        """Test the first-detected reason becomes the headline."""
        result = make_revenue_result(current_net=70_000)
        assert build_headline(result.status, result.reasons) == "Revenue velocity down 25%+ vs baseline"

    def test_code_when_detail_empty(self):
        """Test the code stands in for a missing detail."""
        reasons = [DriftReason(code="REFUND_RATE_UP_2")]
        assert build_headline(DriftStatus.SOFTENING, reasons) == "REFUND_RATE_UP_2"

    def test_generic_without_reasons(self):
        """Test a non-stable status without reasons gets the generic headline."""
        assert build_headline(DriftStatus.WATCH, []) == GENERIC_HEADLINE


class TestConfidence:
    """Test the conservative confidence tiers."""

    def test_revenue_pair_is_medium(self):
        """Test baseline and current revenue give medium confidence."""
        result = make_revenue_result(current_net=70_000)
        assert compute_confidence(result.reasons, result.meta) == Confidence.MEDIUM

    def test_warmup_is_low(self):
        """Test warming-up history never exceeds low confidence."""
        result = make_revenue_result(current_net=70_000, baseline_gross_revenue_cents=1_000)
        assert compute_confidence(result.reasons, result.meta) == Confidence.LOW

    def test_legacy_is_low(self):
        """Test legacy results have no revenue metric to vouch for them."""
        result = LegacyEngine().compute(make_legacy_input(current_reviews=7))
        assert compute_confidence(result.reasons, result.meta) == Confidence.LOW

    def test_missing_meta_is_low(self):
        """Test confidence without metadata."""
        assert compute_confidence([], None) == Confidence.LOW


class TestDrivers:
    """Test the metrics shown behind a status."""

    def test_revenue_drivers_order_and_format(self):
        """Test refund rate precedes net revenue, formatted for display."""
        result = RevenueEngine().compute(make_revenue_input(
            current_net=70_000, baseline_refund_rate=0.03, current_refund_rate=0.03
        ))
        refund, revenue = build_drivers(result.meta)

        assert refund.label == "Refund rate (14d)"
        assert refund.value == "3.0%"
        assert refund.baseline == "3.0%"
        assert refund.delta == "+0.0%"

        assert revenue.label == "Net revenue (14d)"
        assert revenue.value == "$700.00"
        assert revenue.baseline == "$1,000.00"
        assert revenue.delta == "-30%"

    def test_no_refund_driver_without_current_rate(self):
        """Test the refund driver needs a current refund rate."""
        result = RevenueEngine().compute(make_revenue_input(current_refund_rate=None))
        drivers = build_drivers(result.meta)
        assert [d.label for d in drivers] == ["Net revenue (14d)"]

    def test_legacy_has_no_drivers(self):
        """Test legacy metadata yields no drivers."""
        result = LegacyEngine().compute(make_legacy_input())
        assert build_drivers(result.meta) == []


class TestImpact:
    """Test the monthly revenue impact estimate."""

    def test_impact_from_monthly_revenue(self):
        """Test monthly revenue times the revenue delta, rounded."""
        result = make_revenue_result(current_net=90_000)
        impact = estimate_monthly_impact(5_000_000, result.meta)
        assert impact.est_monthly_cents == -500_000
        assert impact.est_monthly == "-$5,000.00"

    def test_no_impact_without_monthly_revenue(self):
        """Test no figure is fabricated from partial data."""
        result = make_revenue_result(current_net=90_000)
        impact = estimate_monthly_impact(None, result.meta)
        assert impact.est_monthly_cents is None
        assert impact.est_monthly is None

    def test_no_impact_for_legacy(self):
        """Test legacy metadata has no revenue delta."""
        result = LegacyEngine().compute(make_legacy_input())
        assert estimate_monthly_impact(5_000_000, result.meta).est_monthly is None


class TestNextSteps:
    """Test next-step script selection."""

    def test_stable_script(self):
        """Test stable results get the monitoring script."""
        assert next_steps_for(DriftStatus.STABLE, []) == NEXT_STEPS["stable"]

    def test_refund_script(self):
        """Test any refund reason selects the refund script."""
        reasons = [DriftReason(code="REV_VELOCITY_DROP_10"), DriftReason(code="REFUND_RATE_UP_2")]
        assert next_steps_for(DriftStatus.SOFTENING, reasons) == NEXT_STEPS["refund"]

    def test_drift_script(self):
        """Test other drift selects the generic drift script."""
        reasons = [DriftReason(code="REV_VELOCITY_DROP_25")]
        assert next_steps_for(DriftStatus.ATTENTION, reasons) == NEXT_STEPS["drift"]

    def test_email_status_selects_drift_script(self):
        """Test a three-state email status is not read as stable."""
        reasons = [DriftReason(code="REV_VELOCITY_DROP_25")]
        assert next_steps_for(EmailStatus.ATTENTION, reasons) == NEXT_STEPS["drift"]

    def test_returns_copy(self):
        """Test callers cannot mutate the shared scripts."""
        steps = next_steps_for(DriftStatus.STABLE, [])
        steps.append("extra")
        assert "extra" not in NEXT_STEPS["stable"]


class TestExecutiveSummary:
    """Test the assembled summary."""

    def test_full_summary(self):
        """Test every part is assembled for one business."""
        result = make_revenue_result(current_net=70_000)
        summary = executive_summary(
            result, "biz_1", business_name="Corner Cafe", monthly_revenue_cents=1_000_000
        )
        assert summary.business_name == "Corner Cafe"
        assert summary.status == DriftStatus.ATTENTION
        assert summary.headline == "Revenue velocity down 25%+ vs baseline"
        assert summary.confidence == Confidence.MEDIUM
        assert len(summary.drivers) == 2
        assert summary.impact.est_monthly_cents == -300_000
        assert summary.next_steps == NEXT_STEPS["drift"]
        assert summary.details_path == "/alerts/biz_1"

    def test_name_defaults_to_identifier(self):
        """Test the business id stands in for a missing name."""
        summary = executive_summary(make_revenue_result(current_net=100_000), "biz_9")
        assert summary.business_name == "biz_9"
        assert summary.headline == STABLE_HEADLINE

    def test_custom_details_path(self):
        """Test the details link follows the configured template."""
        summary = executive_summary(
            make_revenue_result(), "biz_1", details_path_template="/b/{business_id}/drift"
        )
        assert summary.details_path == "/b/biz_1/drift"

    def test_config_thresholds_show_in_headline(self):
        """Test reason details describe the thresholds actually applied."""
        config = DriftConfig(revenue_drop_high=0.20)
        result = make_revenue_result(current_net=75_000, config=config)
        assert executive_summary(result, "biz_1").headline == "Revenue velocity down 20%+ vs baseline"
