"""User-facing messages for sampling outcomes.

Every failure maps to exactly one message chosen by its error code; a
successful run maps to one confirmation naming both artifacts and the folder
they were saved in.
"""

from __future__ import annotations

from pathlib import Path

from spreadsheet_sampler.sample_spec import NOT_A_NUMBER
from spreadsheet_sampler.utils.exceptions import (
    EmptyDataRegionError,
    ErrorCode,
    SamplerError,
)

_FAILURE_MESSAGES: dict[str, dict[ErrorCode, str]] = {
    "lt": {
        ErrorCode.FILE_NOT_FOUND: "Pasirinktas failas nerastas.",
        ErrorCode.FILE_TOO_LARGE: "Failas per didelis.",
        ErrorCode.UNSUPPORTED_FORMAT: "Pasirinkite Excel failą (.xls arba .xlsx).",
        ErrorCode.FILE_READ_ERROR: "Nepavyko perskaityti Excel failo.",
        ErrorCode.MISSING_FILE: "Nepasirinktas Excel failas.",
        ErrorCode.INVALID_PERCENTAGE: "Procentai turi būti nuo 0 iki 100.",
        ErrorCode.INVALID_COUNT: "Kiekis turi būti neneigiamas sveikasis skaičius.",
        ErrorCode.INVALID_INPUT: (
            "Būtinai pasirinkite vieną iš pasirinkimo punktų: procentai arba kiekis."
        ),
        ErrorCode.JOB_NOT_FOUND: "Rezultatas nerastas.",
        ErrorCode.HEADER_NOT_FOUND: "Įvyko klaida. Faile nerasta antraštės eilutė.",
        ErrorCode.EMPTY_DATA_REGION: (
            "Įvyko klaida. Iš viso duomenų eilučių yra {row_count}."
        ),
        ErrorCode.SPREADSHEET_EXPORT_FAILED: "Klaida bandant sukurti Excel'io failą.",
        ErrorCode.REPORT_EXPORT_FAILED: "Klaida bandant išrašyti tekstinį failą.",
        ErrorCode.INTERNAL_ERROR: "Nežinoma klaida.",
        ErrorCode.UNEXPECTED_ERROR: "Nežinoma klaida.",
    },
    "en": {
        ErrorCode.FILE_NOT_FOUND: "The selected file was not found.",
        ErrorCode.FILE_TOO_LARGE: "The file is too large.",
        ErrorCode.UNSUPPORTED_FORMAT: "Please choose an Excel file (.xls or .xlsx).",
        ErrorCode.FILE_READ_ERROR: "The Excel file could not be read.",
        ErrorCode.MISSING_FILE: "No Excel file was selected.",
        ErrorCode.INVALID_PERCENTAGE: "The percentage must be from 0 to 100.",
        ErrorCode.INVALID_COUNT: "The count must be a non-negative whole number.",
        ErrorCode.INVALID_INPUT: "Please choose either a percentage or a count.",
        ErrorCode.JOB_NOT_FOUND: "The result was not found.",
        ErrorCode.HEADER_NOT_FOUND: "An error occurred. No header row was found.",
        ErrorCode.EMPTY_DATA_REGION: (
            "An error occurred. The total number of data rows is {row_count}."
        ),
        ErrorCode.SPREADSHEET_EXPORT_FAILED: (
            "An error occurred while creating the Excel file."
        ),
        ErrorCode.REPORT_EXPORT_FAILED: (
            "An error occurred while writing the text file."
        ),
        ErrorCode.INTERNAL_ERROR: "Unknown error.",
        ErrorCode.UNEXPECTED_ERROR: "Unknown error.",
    },
}

_NOT_A_NUMBER_MESSAGES: dict[str, dict[ErrorCode, str]] = {
    "lt": {
        ErrorCode.INVALID_PERCENTAGE: "Netinkama skaitinė reikšmė procentams.",
        ErrorCode.INVALID_COUNT: "Netinkama skaitinė reikšmė kiekiui.",
    },
    "en": {
        ErrorCode.INVALID_PERCENTAGE: "Invalid numeric value for the percentage.",
        ErrorCode.INVALID_COUNT: "Invalid numeric value for the count.",
    },
}

_SUCCESS_MESSAGES: dict[str, str] = {
    "lt": (
        "Duomenys sėkmingai apdoroti ir išsaugoti.\n"
        "Nauja Excel'io lentelė išsaugota faile {spreadsheet}.\n"
        "Duomenų apdorojimo paaiškinimas išsaugotas faile {report}.\n"
        "Abu failai išsaugoti: {destination}"
    ),
    "en": (
        "The data was processed and saved successfully.\n"
        "The new Excel table was saved to {spreadsheet}.\n"
        "The explanation of the processing was saved to {report}.\n"
        "Both files were saved in: {destination}"
    ),
}


def describe_failure(error: SamplerError, language: str = "lt") -> str:
    """Return the single message shown to the user for ``error``."""
    if error.details.get("reason") == NOT_A_NUMBER:
        not_a_number = _NOT_A_NUMBER_MESSAGES.get(language, _NOT_A_NUMBER_MESSAGES["lt"])
        if error.error_code in not_a_number:
            return not_a_number[error.error_code]
    messages = _FAILURE_MESSAGES.get(language, _FAILURE_MESSAGES["lt"])
    template = messages.get(error.error_code, messages[ErrorCode.UNEXPECTED_ERROR])
    if isinstance(error, EmptyDataRegionError):
        return template.format(row_count=max(error.row_count, 0))
    return template


def describe_success(
    spreadsheet_path: Path, report_path: Path, language: str = "lt"
) -> str:
    """Return the confirmation naming both artifacts and their folder."""
    template = _SUCCESS_MESSAGES.get(language, _SUCCESS_MESSAGES["lt"])
    return template.format(
        spreadsheet=spreadsheet_path.name,
        report=report_path.name,
        destination=spreadsheet_path.parent.resolve(),
    )
