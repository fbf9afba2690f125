"""Partial pydantic view of a Google Solar API buildingInsights response.

Only the fields the relay reads are declared. Every field is optional because
the provider omits whole sub-records depending on coverage and region, and
unknown fields are kept so the raw document can be echoed back untouched.
Display-only fields are typed ``Any`` and passed through as received.

``financialAnalyses`` and ``solarPanelConfigs`` stay raw lists: only the
entry that ends up selected is validated, so a bad value in any other entry
cannot affect the result.
"""
from typing import Any, List, Optional, Union

from pydantic import BaseModel


class Money(BaseModel):
    model_config = {"extra": "allow"}

    # int64 values arrive JSON-encoded as strings
    units: Optional[Union[int, float, str]] = None


class SavingsOverTime(BaseModel):
    model_config = {"extra": "allow"}

    savingsYear1: Optional[Money] = None
    savingsYear20: Optional[Money] = None
    financiallyViable: Optional[bool] = None


class CashPurchaseSavings(BaseModel):
    model_config = {"extra": "allow"}

    savings: Optional[SavingsOverTime] = None
    upfrontCost: Optional[Money] = None
    rebateValue: Optional[Money] = None
    paybackYears: Optional[float] = None


class FinancedPurchaseSavings(BaseModel):
    model_config = {"extra": "allow"}

    savings: Optional[SavingsOverTime] = None
    annualLoanPayment: Optional[Money] = None
    loanInterestRate: Optional[float] = None


class LeasingSavings(BaseModel):
    model_config = {"extra": "allow"}

    savings: Optional[SavingsOverTime] = None
    annualLeasingCost: Optional[Money] = None
    leasesAllowed: Optional[bool] = None


class FinancialDetails(BaseModel):
    model_config = {"extra": "allow"}

    initialAcKwhPerYear: Any = None
    solarPercentage: Any = None
    percentageExportedToGrid: Any = None
    netMeteringAllowed: Any = None
    costOfElectricityWithoutSolar: Optional[Money] = None


class FinancialAnalysis(BaseModel):
    model_config = {"extra": "allow"}

    monthlyBill: Optional[Money] = None
    panelConfigIndex: Optional[int] = None
    financialDetails: Optional[FinancialDetails] = None
    cashPurchaseSavings: Optional[CashPurchaseSavings] = None
    financedPurchaseSavings: Optional[FinancedPurchaseSavings] = None
    leasingSavings: Optional[LeasingSavings] = None


class SolarPanelConfig(BaseModel):
    model_config = {"extra": "allow"}

    panelsCount: Optional[int] = None


class SolarPotential(BaseModel):
    model_config = {"extra": "allow"}

    maxArrayPanelsCount: Any = None
    maxArrayAreaMeters2: Optional[float] = None
    maxSunshineHoursPerYear: Any = None
    carbonOffsetFactorKgPerMwh: Optional[float] = None
    panelCapacityWatts: Any = None
    panelHeightMeters: Any = None
    panelWidthMeters: Any = None
    panelLifetimeYears: Any = None
    financialAnalyses: Optional[List[Any]] = None
    solarPanelConfigs: Optional[List[Any]] = None


class BuildingInsights(BaseModel):
    model_config = {"extra": "allow"}

    solarPotential: Optional[SolarPotential] = None
