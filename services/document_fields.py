"""
Document Field Tables
Per-document-type bindings of raw field name -> parser and confidence weight
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from services.field_parsers import (
    get_account_last4,
    lower_trimmed,
    mask_ssn,
    normalize_address,
    normalize_ein,
    normalize_name,
    normalize_state,
    parse_account_number,
    parse_currency,
    parse_date,
    parse_hours,
    parse_percentage,
    parse_tax_year,
    pass_through,
    strip_spaces,
    upper_first_char,
    upper_trimmed,
)


class DocumentType(str, Enum):
    """Document categories the normalizer has field tables for"""
    W2 = "w2"
    PAYSTUB = "paystub"
    BANK_STATEMENT = "bank_statement"
    TAX_RETURN = "tax_return"
    ID = "id"
    DRIVERS_LICENSE = "drivers_license"
    PASSPORT = "passport"
    SOCIAL_SECURITY_CARD = "social_security_card"
    UTILITY_BILL = "utility_bill"
    FORM_1099 = "1099"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Union["DocumentType", str]) -> "DocumentType":
        """Accept an enum member or its tag; unknown tags raise ValueError"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ValueError(f"Unsupported document type '{value}' (expected one of: {known})") from None


@dataclass(frozen=True)
class FieldParserConfig:
    """Parser and overall-confidence weight for one raw field"""
    parser: Callable[[Any], Optional[Any]]
    weight: float = 1.0


PASS_THROUGH = FieldParserConfig(parser=pass_through, weight=1.0)


def _table(**fields: FieldParserConfig) -> Mapping[str, FieldParserConfig]:
    return MappingProxyType(dict(fields))


F = FieldParserConfig

DOCUMENT_FIELD_CONFIGS: Mapping[DocumentType, Mapping[str, FieldParserConfig]] = MappingProxyType({
    DocumentType.W2: _table(
        employerName=F(normalize_name, 2.0),
        employerEIN=F(normalize_ein, 1.5),
        employerAddress=F(normalize_address, 1.0),
        employeeName=F(normalize_name, 2.5),
        employeeSSN=F(mask_ssn, 3.0),
        employeeAddress=F(normalize_address, 1.0),
        wagesTips=F(parse_currency, 3.0),
        federalTaxWithheld=F(parse_currency, 2.0),
        socialSecurityWages=F(parse_currency, 2.0),
        socialSecurityTax=F(parse_currency, 1.5),
        medicareWages=F(parse_currency, 2.0),
        medicareTax=F(parse_currency, 1.5),
        stateWages=F(parse_currency, 1.5),
        stateTaxWithheld=F(parse_currency, 1.5),
        taxYear=F(parse_tax_year, 2.0),
    ),

    DocumentType.PAYSTUB: _table(
        employeeName=F(normalize_name, 2.5),
        employeeSSN=F(mask_ssn, 3.0),
        employerName=F(normalize_name, 2.0),
        payPeriodStart=F(parse_date, 1.5),
        payPeriodEnd=F(parse_date, 1.5),
        payDate=F(parse_date, 2.0),
        grossPay=F(parse_currency, 3.0),
        netPay=F(parse_currency, 2.5),
        ytdGross=F(parse_currency, 2.5),
        ytdNet=F(parse_currency, 2.0),
        federalTax=F(parse_currency, 1.5),
        stateTax=F(parse_currency, 1.5),
        hoursWorked=F(parse_hours, 1.0),
        hourlyRate=F(parse_currency, 1.5),
        retirementContributionRate=F(parse_percentage, 1.0),
    ),

    DocumentType.BANK_STATEMENT: _table(
        accountHolderName=F(normalize_name, 2.5),
        accountNumber=F(parse_account_number, 2.0),
        accountNumberLast4=F(get_account_last4, 2.0),
        accountType=F(lower_trimmed, 1.0),
        bankName=F(pass_through, 1.5),
        statementPeriodStart=F(parse_date, 1.5),
        statementPeriodEnd=F(parse_date, 1.5),
        beginningBalance=F(parse_currency, 2.5),
        endingBalance=F(parse_currency, 3.0),
        totalDeposits=F(parse_currency, 2.0),
        totalWithdrawals=F(parse_currency, 2.0),
        averageDailyBalance=F(parse_currency, 2.0),
        interestRate=F(parse_percentage, 1.0),
    ),

    DocumentType.TAX_RETURN: _table(
        taxpayerName=F(normalize_name, 2.5),
        taxpayerSSN=F(mask_ssn, 3.0),
        spouseName=F(normalize_name, 2.0),
        spouseSSN=F(mask_ssn, 2.5),
        taxYear=F(parse_tax_year, 2.0),
        filingStatus=F(lower_trimmed, 1.5),
        totalIncome=F(parse_currency, 3.0),
        adjustedGrossIncome=F(parse_currency, 3.0),
        taxableIncome=F(parse_currency, 2.5),
        totalTax=F(parse_currency, 2.0),
        refundAmount=F(parse_currency, 1.5),
        amountOwed=F(parse_currency, 1.5),
    ),

    DocumentType.ID: _table(
        fullName=F(normalize_name, 3.0),
        dateOfBirth=F(parse_date, 3.0),
        licenseNumber=F(strip_spaces, 2.5),
        expirationDate=F(parse_date, 2.0),
        issueDate=F(parse_date, 1.5),
        address=F(normalize_address, 2.0),
        state=F(normalize_state, 1.5),
        idType=F(lower_trimmed, 1.0),
    ),

    DocumentType.DRIVERS_LICENSE: _table(
        fullName=F(normalize_name, 3.0),
        licenseNumber=F(strip_spaces, 2.5),
        dateOfBirth=F(parse_date, 3.0),
        expirationDate=F(parse_date, 2.0),
        issueDate=F(parse_date, 1.5),
        address=F(normalize_address, 2.0),
        state=F(normalize_state, 1.5),
        sex=F(upper_first_char, 1.0),
        height=F(pass_through, 0.5),
        eyeColor=F(upper_trimmed, 0.5),
    ),

    DocumentType.PASSPORT: _table(
        fullName=F(normalize_name, 3.0),
        passportNumber=F(strip_spaces, 2.5),
        nationality=F(pass_through, 2.0),
        dateOfBirth=F(parse_date, 3.0),
        placeOfBirth=F(pass_through, 1.5),
        issueDate=F(parse_date, 1.5),
        expirationDate=F(parse_date, 2.0),
        sex=F(upper_first_char, 1.0),
    ),

    DocumentType.SOCIAL_SECURITY_CARD: _table(
        fullName=F(normalize_name, 3.0),
        ssn=F(mask_ssn, 3.0),
    ),

    DocumentType.UTILITY_BILL: _table(
        accountHolderName=F(normalize_name, 2.5),
        accountNumber=F(parse_account_number, 1.5),
        serviceAddress=F(normalize_address, 3.0),
        billingAddress=F(normalize_address, 2.0),
        utilityProvider=F(pass_through, 1.5),
        billDate=F(parse_date, 2.0),
        dueDate=F(parse_date, 1.5),
        amountDue=F(parse_currency, 2.0),
        previousBalance=F(parse_currency, 1.0),
        currentCharges=F(parse_currency, 1.5),
    ),

    DocumentType.FORM_1099: _table(
        recipientName=F(normalize_name, 2.5),
        recipientSSN=F(mask_ssn, 3.0),
        recipientAddress=F(normalize_address, 1.5),
        payerName=F(normalize_name, 2.0),
        payerEIN=F(normalize_ein, 1.5),
        taxYear=F(parse_tax_year, 2.0),
        nonemployeeCompensation=F(parse_currency, 3.0),
        federalTaxWithheld=F(parse_currency, 2.0),
        stateTaxWithheld=F(parse_currency, 1.5),
    ),

    DocumentType.OTHER: _table(
        name=F(normalize_name, 2.0),
        date=F(parse_date, 1.5),
        amount=F(parse_currency, 2.0),
        address=F(normalize_address, 1.5),
        accountNumber=F(parse_account_number, 1.5),
    ),
})

_missing = [member.value for member in DocumentType if member not in DOCUMENT_FIELD_CONFIGS]
if _missing:
    raise RuntimeError(f"No field table registered for document types: {', '.join(_missing)}")


def get_field_config(document_type: Union[DocumentType, str], field_name: str) -> FieldParserConfig:
    """Parser config for a field; unknown fields fall back to trim-and-return"""
    table = DOCUMENT_FIELD_CONFIGS[DocumentType.coerce(document_type)]
    return table.get(field_name, PASS_THROUGH)
