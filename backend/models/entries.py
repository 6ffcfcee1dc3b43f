from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DataEntry(BaseModel):
    """One data-entry form submission. Keys follow the entry form field names."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", coerce_numbers_to_str=True)

    district_name: str | None = Field(None, alias="districtName")
    mandal_name: str | None = Field(None, alias="mandalName")
    secretariat_id: str | None = Field(None, alias="secretariatID")
    secretariat_name: str | None = Field(
        None,
        alias="secretraiatName",
        validation_alias=AliasChoices("secretraiatName", "secretariatName", "secretariat_name"),
    )
    employee_id: str | None = Field(None, alias="employeeID")
    employee_name: str | None = Field(None, alias="employeeName")
    cluster_id: str | None = Field(None, alias="clusterID")

    total_bangaru_kutumbam: int | None = Field(None, alias="totalBangaruKutumbam")
    adopted_count: int | None = Field(None, alias="noOfBangaruKutumbamAdopted")
    margadarsi_mobilized_count: int | None = Field(None, alias="noOfMargadarsiMobilized")
    verified_by_gsws_count: int | None = Field(None, alias="bksVerifiedByGSWS")
    margadarsis_contacted_count: int | None = Field(None, alias="margadarsisContactedByGSWS")
    new_needs_captured_count: int | None = Field(None, alias="noOfBksNewNeedsCaptured")
    margadarsis_agreed_count: int | None = Field(None, alias="noOfMargadarsisAgreedToAddressBkNeeds")
    needs_closed_count: int | None = Field(None, alias="noOfBkNeedsClosed")
    delinking_requests_count: int | None = Field(None, alias="noOfDelinkingRequestsRaised")

    def by_entry_key(self) -> dict:
        return self.model_dump(by_alias=True)


class FilterSet(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", coerce_numbers_to_str=True)

    mandal_name: str | None = None
    secretariat_name: str | None = Field(
        None,
        validation_alias=AliasChoices("secretariatName", "secretraiatName", "secretariat_name"),
    )
    employee_id: str | None = None
    employee_name: str | None = None
    cluster_id: str | None = None

    def active(self) -> dict[str, str]:
        """Filters that actually constrain the result (non-empty values)."""
        return {k: v for k, v in self.model_dump().items() if v}


class QueryRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    filters: FilterSet = Field(default_factory=FilterSet)
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
