from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError
from typing import Any, Dict, List, Optional

from logger import logger

class TagOccurrence(BaseModel):
    model_config = ConfigDict(frozen=True, extra='allow')

    tag: str = Field(..., description='Detected label, e.g. "Living Room"')
    categories: List[str] = Field(default=[], description='Categories the label belongs to, e.g. ["room"]')
    start_time_offset: float = Field(..., description='Offset in seconds where the label starts in the video')
    end_time_offset: Optional[float] = Field(default=None, description='Offset in seconds where the label ends')
    confidence: Optional[float] = Field(default=None, description='Confidence score of the detection')

class Marker(BaseModel):
    text: str = Field(..., description='Text shown on the marker button')
    start_time_offset: float = Field(..., description='Offset the player seeks to when the marker is clicked')

class TagGroup(BaseModel):
    label: str = Field(..., description='Tag text of the first occurrence of the group')
    occurrences: List[TagOccurrence] = Field(default=[], description='Occurrences sharing the label, in first-seen order')

    def markers(self) -> List[Marker]:
        if len(self.occurrences) == 1:
            occurrence = self.occurrences[0]
            return [Marker(text=occurrence.tag, start_time_offset=occurrence.start_time_offset)]
        return [
            Marker(text=f"{occurrence.tag} {index + 1}", start_time_offset=occurrence.start_time_offset)
            for index, occurrence in enumerate(self.occurrences)
        ]

class UploadResult(BaseModel):
    model_config = ConfigDict(extra='allow')

    secure_url: str = Field(..., description='HTTPS URL of the uploaded video')
    format: str = Field(..., description='Container format of the uploaded video, e.g. "mp4"')
    public_id: Optional[str] = None
    resource_type: Optional[str] = None
    duration: Optional[float] = None
    info: Optional[Dict[str, Any]] = Field(default=None, description='Add-on results, tagging under info.categorization.<namespace>')

    _payload: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'UploadResult':
        result = cls.model_validate(payload)
        result._payload = payload
        return result

    def tag_occurrences(self, namespace: str) -> List[TagOccurrence]:
        """
        Tag occurrences of a categorization namespace, validated on read.
        Pending or absent tagging yields no occurrences; malformed records are skipped.
        """
        categorization = (self.info or {}).get('categorization')
        if not isinstance(categorization, dict) or not isinstance(categorization.get(namespace), dict):
            return []

        occurrences = []
        for record in categorization[namespace].get('data') or []:
            try:
                occurrences.append(TagOccurrence.model_validate(record))
            except ValidationError as e:
                logger.warning(f"[TAGGING] Skipping malformed {namespace} record {record}: {e}")
        return occurrences

    def to_payload(self) -> Dict[str, Any]:
        """Upstream payload as received, including the fields the model doesn't declare"""
        return self._payload or self.model_dump(mode='json', exclude_unset=True)
