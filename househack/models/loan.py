from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LoanScenario:
    """User-adjustable loan parameters. Defaults are a standard FHA loan."""

    down_payment_percent: Decimal = Decimal("3.5")
    interest_rate: Decimal = Decimal("6.5")  # Annual, percent
    loan_term_years: int = 30
    mip_rate: Decimal = Decimal("0.85")  # Annual, percent of loan amount (0.55 or 0.85 typical)


@dataclass(frozen=True)
class CalculationResult:
    loan_amount: Decimal
    monthly_principal_interest: Decimal
    monthly_taxes: Decimal
    monthly_insurance: Decimal
    monthly_mip: Decimal
    total_piti: Decimal

    # Income
    gross_rental_income: Decimal
    net_rental_income: Decimal  # Gross after the 75% vacancy factor
    cash_flow: Decimal  # Gross rent - PITI

    self_sufficiency_pass: bool
    unit_count: int = 0

    @property
    def self_sufficiency_applies(self) -> bool:
        """FHA self-sufficiency is only tested for 3-4 unit properties."""
        return self.unit_count >= 3
