"""Define standardized column names for summary DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SummaryColumns:
    """Container for standardized column labels.

    These column names are used in every coefficient summary table, ensuring
    consistency between the analysis driver, the reporting layer and the CSV
    exports.

    Attributes:
        variable: Coefficient name as exposed by the fitted model, for example
            ``"(Intercept)"``, ``"mpg"`` or ``"mpg:cyl"``.

        medp: Maximum effect direction probability, in percent (0-100).

        median, mad, mean, sd: Central tendency and dispersion of the draws.
            MAD is scaled for consistency with the normal SD.

        ci_lower, ci_higher: Bounds of the interval at the requested
            confidence level.

        medp_lower, medp_higher: Bounds of the interval found by the MEDP
            search.
    """

    variable: str = "Variable"
    medp: str = "MEDP"
    median: str = "Median"
    mad: str = "MAD"
    mean: str = "Mean"
    sd: str = "SD"
    ci_lower: str = "CI_lower"
    ci_higher: str = "CI_higher"
    medp_lower: str = "MEDP_lower"
    medp_higher: str = "MEDP_higher"
    label: str = "Label"

    def numeric(self) -> tuple[str, ...]:
        """Return the numeric summary columns in table order."""
        return (
            self.medp,
            self.median,
            self.mad,
            self.mean,
            self.sd,
            self.ci_lower,
            self.ci_higher,
            self.medp_lower,
            self.medp_higher,
        )


COLUMNS = SummaryColumns()
