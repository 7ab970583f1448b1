"""
Single-field update commands.

One command variant per input section, discriminated by ``section``. The
variant knows which section it targets, so applying an update never needs
reflection over the whole inputs aggregate.
"""

from typing import Annotated, Any, ClassVar, Dict, Literal, Type, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from dealcalc.models.inputs import (
    CalculatorInputs,
    DSCRLoanInputs,
    FlipInputs,
    IncomeInputs,
    InputSection,
    OperatingInputs,
    PropertyBasicsInputs,
    PurchaseCostsInputs,
    SecondLoanInputs,
    SubjectToInputs,
    TaxInsuranceInputs,
    WrapLoanInputs,
    WrapSalesInputs,
)


class SectionUpdate(BaseModel):
    """Set ``field`` of one input section to ``value``."""

    target: ClassVar[Type[InputSection]]
    attribute: ClassVar[str]

    field: str
    value: Any = None

    @field_validator("field")
    @classmethod
    def resolve_field_name(cls, value: str) -> str:
        names: Dict[str, str] = {}
        for name, info in cls.target.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name
        if value not in names:
            raise ValueError(f"unknown field {value!r} for section {cls.attribute}")
        return names[value]

    def apply(self, inputs: CalculatorInputs) -> CalculatorInputs:
        """Return new inputs with this update applied and the section revalidated."""
        values = getattr(inputs, self.attribute).model_dump()
        values[self.field] = self.value
        section = self.target.model_validate(values)
        return inputs.model_copy(deep=True, update={self.attribute: section})


class PropertyBasicsUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = PropertyBasicsInputs
    attribute: ClassVar[str] = "property_basics"
    section: Literal["propertyBasics"] = "propertyBasics"


class PurchaseCostsUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = PurchaseCostsInputs
    attribute: ClassVar[str] = "purchase_costs"
    section: Literal["purchaseCosts"] = "purchaseCosts"


class TaxInsuranceUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = TaxInsuranceInputs
    attribute: ClassVar[str] = "tax_insurance"
    section: Literal["taxInsurance"] = "taxInsurance"


class IncomeUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = IncomeInputs
    attribute: ClassVar[str] = "income"
    section: Literal["income"] = "income"


class OperatingUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = OperatingInputs
    attribute: ClassVar[str] = "operating"
    section: Literal["operating"] = "operating"


class SubjectToUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = SubjectToInputs
    attribute: ClassVar[str] = "subject_to"
    section: Literal["subjectTo"] = "subjectTo"


class DSCRLoanUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = DSCRLoanInputs
    attribute: ClassVar[str] = "dscr_loan"
    section: Literal["dscrLoan"] = "dscrLoan"


class SecondLoanUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = SecondLoanInputs
    attribute: ClassVar[str] = "second_loan"
    section: Literal["secondLoan"] = "secondLoan"


class WrapLoanUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = WrapLoanInputs
    attribute: ClassVar[str] = "wrap_loan"
    section: Literal["wrapLoan"] = "wrapLoan"


class WrapSalesUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = WrapSalesInputs
    attribute: ClassVar[str] = "wrap_sales"
    section: Literal["wrapSales"] = "wrapSales"


class FlipUpdate(SectionUpdate):
    target: ClassVar[Type[InputSection]] = FlipInputs
    attribute: ClassVar[str] = "flip"
    section: Literal["flip"] = "flip"


FieldUpdate = Annotated[
    Union[
        PropertyBasicsUpdate,
        PurchaseCostsUpdate,
        TaxInsuranceUpdate,
        IncomeUpdate,
        OperatingUpdate,
        SubjectToUpdate,
        DSCRLoanUpdate,
        SecondLoanUpdate,
        WrapLoanUpdate,
        WrapSalesUpdate,
        FlipUpdate,
    ],
    Field(discriminator="section"),
]

_field_update_adapter = TypeAdapter(FieldUpdate)


def field_update(section: str, field: str, value: Any) -> SectionUpdate:
    """Build the update command for ``section`` (camelCase section name)."""
    return _field_update_adapter.validate_python(
        {"section": section, "field": field, "value": value}
    )
