from typing import Any, Dict, Optional

from pydantic import BaseModel


# Echoed submission sections
class UserInfo(BaseModel):
    name: Any = None
    phone: Any = None
    email: Any = None


class LocationInfo(BaseModel):
    address: Any = None
    latitude: Any = None
    longitude: Any = None


class PropertyInfo(BaseModel):
    isOwner: Any = None
    monthlyElectricityBill: float = 0


# Normalized summary
class PanelSpecs(BaseModel):
    capacity: str
    dimensions: str
    lifetime: str


class SolarPotentialSummary(BaseModel):
    maximumCapacity: str
    availableArea: str
    sunshine: str
    carbonOffset: str
    panelSpecs: PanelSpecs


class CashPurchaseOption(BaseModel):
    title: str = "PAY CASH"
    description: str = "Own the system; maximize savings"
    netSavings20yr: int = 0
    netCost: int = 0
    rebateValue: int = 0
    paybackYears: float = 0
    financiallyViable: bool = False
    savingsYear1: int = 0
    propertyValueIncrease: str = "3% or more"


class LoanOption(BaseModel):
    title: str = "$0-DOWN LOAN"
    description: str = "Own the system; no up-front cost"
    netSavings20yr: int = 0
    outOfPocketCost: int = 0
    annualLoanPayment: int = 0
    interestRate: float = 0
    financiallyViable: bool = False
    payback: str = "Immediate"
    propertyValueIncrease: str = "3% or more"


class LeaseOption(BaseModel):
    title: str = "$0-DOWN LEASE/PPA"
    description: str = "Rent the system; no up-front cost"
    netSavings20yr: int = 0
    outOfPocketCost: int = 0
    annualLeasingCost: int = 0
    leasesAllowed: bool = False
    financiallyViable: bool = False
    payback: str = "Immediate"
    # Leased systems stay with the lessor
    propertyValueIncrease: str = "0%"


class SolarSystemInfo(BaseModel):
    initialEnergyProduction: Any = None
    solarCoverage: Any = None
    gridExportPercentage: Any = None
    netMeteringAllowed: Any = None
    utilityBillWithoutSolar: int = 0


class ElectricityBillInfo(BaseModel):
    userMonthlyBill: float
    closestAnalyzedBill: Optional[int] = None


class NormalizedSummary(BaseModel):
    solarPotentialSummary: SolarPotentialSummary
    financingOptions: Dict[str, Dict[str, Any]]
    solarSystemInfo: Dict[str, Any]
    recommendedPanels: int = 0
    electricityBillInfo: ElectricityBillInfo


class WebhookResult(BaseModel):
    success: bool
    statusCode: Optional[int] = None
    error: Optional[str] = None
