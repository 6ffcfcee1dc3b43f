# models/bk_schema.py
#
# Fixed layout of the Bangaru Kutumbam workbook. Column order is part of the
# wire contract: every write path builds rows from COLUMNS, never from the
# key order of the incoming entry.

from dataclasses import dataclass
from typing import Any, Mapping

WORKBOOK_NAME = "BangaruKutumbamTrackingSystem"
DATA_SHEET_NAME = "BangaruKutumbamData"
CREDENTIALS_SHEET_NAME = "LoginCredentials"
SPREADSHEET_ID_PROPERTY = "SPREADSHEET_ID"

TEXT = "text"
NUMBER = "number"


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    entry_key: str
    kind: str

    @property
    def default(self):
        return "" if self.kind == TEXT else 0


COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("DistrictName", "districtName", TEXT),
    ColumnSpec("MandalName", "mandalName", TEXT),
    ColumnSpec("SecretariatID", "secretariatID", TEXT),
    ColumnSpec("SecretariatName", "secretraiatName", TEXT),
    ColumnSpec("EmployeeID", "employeeID", TEXT),
    ColumnSpec("EmployeeName", "employeeName", TEXT),
    ColumnSpec("ClusterID", "clusterID", TEXT),
    ColumnSpec("TotalBangaruKutumbam", "totalBangaruKutumbam", NUMBER),
    ColumnSpec("AdoptedCount", "noOfBangaruKutumbamAdopted", NUMBER),
    ColumnSpec("MargadarsiMobilizedCount", "noOfMargadarsiMobilized", NUMBER),
    ColumnSpec("VerifiedByGSWSCount", "bksVerifiedByGSWS", NUMBER),
    ColumnSpec("MargadarsisContactedCount", "margadarsisContactedByGSWS", NUMBER),
    ColumnSpec("NewNeedsCapturedCount", "noOfBksNewNeedsCaptured", NUMBER),
    ColumnSpec("MargadarsisAgreedCount", "noOfMargadarsisAgreedToAddressBkNeeds", NUMBER),
    ColumnSpec("NeedsClosedCount", "noOfBkNeedsClosed", NUMBER),
    ColumnSpec("DelinkingRequestsCount", "noOfDelinkingRequestsRaised", NUMBER),
)

HEADERS: list[str] = [c.header for c in COLUMNS]
ROW_WIDTH = len(COLUMNS)

CREDENTIAL_HEADERS: list[str] = ["Username", "Password", "Mandal", "Role"]
CREDENTIAL_WIDTH = len(CREDENTIAL_HEADERS)
DEFAULT_ROLE = "user"

MANDAL_NAME = 1
SECRETARIAT_NAME = 3
EMPLOYEE_ID = 4
EMPLOYEE_NAME = 5
CLUSTER_ID = 6

# FilterSet field -> column index
FILTER_COLUMNS: dict[str, int] = {
    "mandal_name": MANDAL_NAME,
    "secretariat_name": SECRETARIAT_NAME,
    "employee_id": EMPLOYEE_ID,
    "employee_name": EMPLOYEE_NAME,
    "cluster_id": CLUSTER_ID,
}

# FilterOptions field -> column index
OPTION_COLUMNS: dict[str, int] = {
    "mandal_names": MANDAL_NAME,
    "secretraiat_names": SECRETARIAT_NAME,
    "employee_ids": EMPLOYEE_ID,
    "employee_names": EMPLOYEE_NAME,
    "cluster_ids": CLUSTER_ID,
}

SAMPLE_CREDENTIALS: list[list[str]] = [
    ["mandal1", "password1", "Mandal1", "admin"],
    ["mandal2", "password2", "Mandal2", "user"],
    ["mandal3", "password3", "Mandal3", "user"],
]

SAMPLE_DATA: list[list[Any]] = [
    ["District1", "Mandal1", "SEC001", "Secretariat1", "EMP001", "John Doe", "CL001", 50, 45, 30, 25, 20, 15, 10, 8, 5],
    ["District2", "Mandal2", "SEC002", "Secretariat2", "EMP002", "Jane Smith", "CL002", 40, 35, 25, 20, 18, 12, 9, 7, 3],
    ["District3", "Mandal3", "SEC003", "Secretariat3", "EMP003", "Bob Johnson", "CL003", 60, 55, 40, 35, 30, 20, 15, 12, 8],
]


def build_row(values: Mapping[str, Any]) -> list[Any]:
    """
    Build a ROW_WIDTH row from entry values keyed by entry key.
    Falsy values (missing, None, "" or 0) fall back to the column default.
    """
    return [values.get(col.entry_key) or col.default for col in COLUMNS]


def is_blank_row(row: list[Any]) -> bool:
    return all(cell == "" for cell in row)
