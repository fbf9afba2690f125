import logging
import math
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from solar_lead_relay.models.insights import (
    BuildingInsights,
    FinancialAnalysis,
    Money,
    SavingsOverTime,
    SolarPanelConfig,
    SolarPotential,
)
from solar_lead_relay.models.schemas import (
    CashPurchaseOption,
    ElectricityBillInfo,
    LeaseOption,
    LoanOption,
    NormalizedSummary,
    PanelSpecs,
    SolarPotentialSummary,
    SolarSystemInfo,
)

logger = logging.getLogger(__name__)

MISSING_SOLAR_POTENTIAL_ERROR = "invalid or missing solar potential data"
NO_FINANCIAL_ANALYSIS_ERROR = "no financial analysis data available"
PROCESSING_ERROR_PREFIX = "Error processing Solar API response: "

FINANCING_KEYS = ("cashPurchaseSavings", "financedPurchaseSavings", "leasingSavings")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class Selection(NamedTuple):
    # Raw financialAnalyses entry; validated only once selected
    entry: Dict[str, Any]
    # Set only when the analysis was picked by bill distance
    matched_bill: Optional[int] = None


SelectionStrategy = Callable[[Sequence[Any], float], Optional[Selection]]


def round_metric(value: Any) -> float:
    """Round a provider float to the 2 decimal places used for display."""
    return round(float(value), 2)


def is_present(value: Any) -> bool:
    """Provider-side presence: any mapping or list counts, scalars by truthiness."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def parse_units(units: Any) -> Optional[int]:
    """Whole currency units from a Money ``units`` value, or None when unparseable.

    Strings are read up to the first non-digit, so "150.75" gives 150.
    """
    if isinstance(units, bool):
        return None
    if isinstance(units, int):
        return units
    if isinstance(units, float):
        return int(units) if math.isfinite(units) else None
    if isinstance(units, str):
        match = _LEADING_INT.match(units)
        return int(match.group(1)) if match else None
    return None


def money_units(money: Optional[Money]) -> Optional[int]:
    if money is None:
        return None
    return parse_units(money.units)


def _units_or_zero(money: Optional[Money]) -> int:
    units = money_units(money)
    return 0 if units is None else units


def monthly_bill_units(entry: Any) -> Optional[int]:
    """Bill amount of a raw analysis entry, or None when it has no usable bill.

    A numeric 0 counts as absent; the string "0" does not.
    """
    if not isinstance(entry, dict):
        return None
    bill = entry.get("monthlyBill")
    if not isinstance(bill, dict) or not is_present(bill.get("units")):
        return None
    return parse_units(bill.get("units"))


def _financing_present(entry: Any) -> List[bool]:
    if not isinstance(entry, dict):
        return [False] * len(FINANCING_KEYS)
    return [is_present(entry.get(key)) for key in FINANCING_KEYS]


# --- Selection strategies ---

def select_by_bill_distance(analyses: Sequence[Any], target_bill: float) -> Optional[Selection]:
    best = None
    smallest_difference = math.inf
    for entry in analyses:
        bill = monthly_bill_units(entry)
        if bill is None:
            continue
        difference = abs(bill - target_bill)
        # Strict comparison keeps the earliest entry on ties
        if difference < smallest_difference:
            smallest_difference = difference
            best = Selection(entry, bill)
    return best


def select_most_complete(analyses: Sequence[Any], target_bill: float) -> Optional[Selection]:
    for entry in analyses:
        if all(_financing_present(entry)):
            return Selection(entry)
    return None


def select_any_financing(analyses: Sequence[Any], target_bill: float) -> Optional[Selection]:
    for entry in analyses:
        if any(_financing_present(entry)):
            return Selection(entry)
    return None


SELECTION_STRATEGIES: List[SelectionStrategy] = [
    select_by_bill_distance,
    select_most_complete,
    select_any_financing,
]


def select_financial_analysis(
    analyses: Optional[Sequence[Any]],
    target_bill: float,
    strategies: Sequence[SelectionStrategy] = SELECTION_STRATEGIES,
) -> Optional[Selection]:
    """Apply the strategies in order and return the first match."""
    if not analyses:
        return None
    for strategy in strategies:
        selection = strategy(analyses, target_bill)
        if selection is not None:
            return selection
    return None


# --- Projections ---

def summarize_solar_potential(potential: SolarPotential) -> SolarPotentialSummary:
    area = round_metric(potential.maxArrayAreaMeters2 or 0)
    carbon = round_metric(potential.carbonOffsetFactorKgPerMwh or 0)
    return SolarPotentialSummary(
        maximumCapacity=f"{potential.maxArrayPanelsCount} panels",
        availableArea=f"{area:.2f} square meters",
        sunshine=f"{potential.maxSunshineHoursPerYear} hours per year",
        carbonOffset=f"{carbon:.2f} kg/MWh",
        panelSpecs=PanelSpecs(
            capacity=f"{potential.panelCapacityWatts} watts",
            dimensions=f"{potential.panelHeightMeters}m × {potential.panelWidthMeters}m",
            lifetime=f"{potential.panelLifetimeYears} years",
        ),
    )


def _savings(savings: Optional[SavingsOverTime]) -> SavingsOverTime:
    return savings if savings is not None else SavingsOverTime()


def project_financing_options(analysis: FinancialAnalysis) -> Dict[str, Dict[str, Any]]:
    options: Dict[str, Dict[str, Any]] = {}

    if analysis.cashPurchaseSavings is not None:
        cash = analysis.cashPurchaseSavings
        savings = _savings(cash.savings)
        options["cashPurchase"] = CashPurchaseOption(
            netSavings20yr=_units_or_zero(savings.savingsYear20),
            netCost=_units_or_zero(cash.upfrontCost),
            rebateValue=_units_or_zero(cash.rebateValue),
            paybackYears=cash.paybackYears or 0,
            financiallyViable=bool(savings.financiallyViable),
            savingsYear1=_units_or_zero(savings.savingsYear1),
        ).model_dump()

    if analysis.financedPurchaseSavings is not None:
        loan = analysis.financedPurchaseSavings
        savings = _savings(loan.savings)
        options["loan"] = LoanOption(
            netSavings20yr=_units_or_zero(savings.savingsYear20),
            annualLoanPayment=_units_or_zero(loan.annualLoanPayment),
            interestRate=loan.loanInterestRate or 0,
            financiallyViable=bool(savings.financiallyViable),
        ).model_dump()

    if analysis.leasingSavings is not None:
        lease = analysis.leasingSavings
        savings = _savings(lease.savings)
        options["lease"] = LeaseOption(
            netSavings20yr=_units_or_zero(savings.savingsYear20),
            annualLeasingCost=_units_or_zero(lease.annualLeasingCost),
            leasesAllowed=bool(lease.leasesAllowed),
            financiallyViable=bool(savings.financiallyViable),
        ).model_dump()

    return options


def project_system_info(analysis: FinancialAnalysis) -> Dict[str, Any]:
    details = analysis.financialDetails
    if details is None:
        return {}
    return SolarSystemInfo(
        initialEnergyProduction=details.initialAcKwhPerYear,
        solarCoverage=details.solarPercentage,
        gridExportPercentage=details.percentageExportedToGrid,
        netMeteringAllowed=details.netMeteringAllowed,
        utilityBillWithoutSolar=_units_or_zero(details.costOfElectricityWithoutSolar),
    ).model_dump()


def recommended_panel_count(analysis: FinancialAnalysis, configs: Optional[List[Any]]) -> int:
    index = analysis.panelConfigIndex
    if index is None or index < 0 or not configs or index >= len(configs):
        return 0
    config = configs[index]
    if not isinstance(config, dict):
        return 0
    return SolarPanelConfig.model_validate(config).panelsCount or 0


def transform_building_insights(insights: Optional[Dict[str, Any]], user_monthly_bill: float) -> Dict[str, Any]:
    """Reshape a buildingInsights document into the UI-ready financing summary.

    Picks the financial analysis whose monthly bill is closest to the user's
    bill (earliest wins on ties). When no analysis carries a usable bill, the
    first one with all three financing options is used, then the first one
    with any. Everything in the summary comes from that single analysis.

    Never raises: structural problems inside the document are returned as
    ``{"error": ..., "rawData": insights}``.
    """
    if not isinstance(insights, dict) or not is_present(insights.get("solarPotential")):
        return {"error": MISSING_SOLAR_POTENTIAL_ERROR}

    try:
        potential = BuildingInsights.model_validate(insights).solarPotential
        summary = summarize_solar_potential(potential)

        selection = select_financial_analysis(potential.financialAnalyses, user_monthly_bill)
        if selection is None:
            return {
                "solarPotentialSummary": summary.model_dump(),
                "financingOptions": {"error": NO_FINANCIAL_ANALYSIS_ERROR},
            }

        analysis = FinancialAnalysis.model_validate(selection.entry)
        return NormalizedSummary(
            solarPotentialSummary=summary,
            financingOptions=project_financing_options(analysis),
            solarSystemInfo=project_system_info(analysis),
            recommendedPanels=recommended_panel_count(analysis, potential.solarPanelConfigs),
            electricityBillInfo=ElectricityBillInfo(
                userMonthlyBill=user_monthly_bill,
                closestAnalyzedBill=selection.matched_bill,
            ),
        ).model_dump()
    except Exception as e:
        logger.exception("Error processing Solar API response")
        return {
            "error": PROCESSING_ERROR_PREFIX + str(e),
            "rawData": insights,
        }
