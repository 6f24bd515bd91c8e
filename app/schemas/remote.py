"""
Remote record store request/response schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
import enum


class ErrorKind(str, enum.Enum):
    """Failure classification decided once at the remote store boundary"""
    AUTHENTICATION = "authentication"
    REMOTE = "remote"
    UNAVAILABLE = "unavailable"


class Operator(str, enum.Enum):
    EQUAL_TO = "EqualTo"
    NOT_EQUAL_TO = "NotEqualTo"
    GREATER_THAN_OR_EQUAL_TO = "GreaterThanOrEqualTo"
    CONTAINS = "Contains"


class Condition(BaseModel):
    """Single field condition"""
    field_name: str
    operator: Operator = Operator.EQUAL_TO
    values: List[Any]

    def to_where(self) -> Dict[str, Any]:
        return {
            "FieldName": self.field_name,
            "Operator": self.operator.value,
            "Values": self.values,
        }

    def to_group(self) -> Dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "operator": self.operator.value,
            "values": self.values,
        }


class WhereGroup(BaseModel):
    """Conditions combined by a logical operator; each sub-group is AND-ed"""
    operator: str = "OR"
    sub_groups: List[List[Condition]]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "operator": self.operator,
            "subGroups": [
                {"conditions": [c.to_group() for c in group]}
                for group in self.sub_groups
            ],
        }


class OrderBy(BaseModel):
    field_name: str
    descending: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "sorttype": "DESC" if self.descending else "ASC",
        }


class PagingInfo(BaseModel):
    limit: int = Field(..., ge=1)
    offset: int = Field(default=0, ge=0)


class RecordQuery(BaseModel):
    """Query accepted by fetch_records"""
    fields: List[str] = Field(default_factory=lambda: ["Id"])
    where: List[Condition] = Field(default_factory=list)
    where_groups: List[WhereGroup] = Field(default_factory=list)
    order_by: List[OrderBy] = Field(default_factory=list)
    paging: Optional[PagingInfo] = None
    group_by: List[str] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the record store wire format"""
        payload: Dict[str, Any] = {
            "fields": [{"field": {"Name": name}} for name in self.fields]
        }
        if self.where:
            payload["where"] = [c.to_where() for c in self.where]
        if self.where_groups:
            payload["whereGroups"] = [g.to_payload() for g in self.where_groups]
        if self.order_by:
            payload["orderBy"] = [o.to_payload() for o in self.order_by]
        if self.paging:
            payload["pagingInfo"] = self.paging.model_dump()
        if self.group_by:
            payload["groupBy"] = list(self.group_by)
        return payload


class RecordResult(BaseModel):
    """Per-record outcome of a batch create or delete"""
    success: bool
    data: Optional[Dict[str, Any]] = None
    message: str = ""
    error_kind: Optional[ErrorKind] = None


class RemoteResponse(BaseModel):
    """Envelope returned by every remote store call"""
    success: bool
    data: Any = None
    results: List[RecordResult] = Field(default_factory=list)
    message: str = ""
    error_kind: Optional[ErrorKind] = None

    @property
    def successful(self) -> List[RecordResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[RecordResult]:
        return [r for r in self.results if not r.success]
