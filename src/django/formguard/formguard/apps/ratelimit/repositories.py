"""
Rate Limit Repositories - ORM access for submissions and limiter state
"""

from datetime import datetime
from typing import Optional

from django.apps import apps

from .limiter import LimiterState, StateStore, SubmissionRecord, SubmissionStore


class BaseRepository:
    """Holds the model class the repository reads and writes"""

    model_label = None

    def __init__(self, model=None):
        self._model = model

    @property
    def model(self):
        if self._model is None:
            self._model = apps.get_model(self.model_label)
        return self._model


class SubmissionRepository(BaseRepository, SubmissionStore):
    """Submission Store backed by SubmittedForm rows"""

    model_label = 'userforms.SubmittedForm'
    parent_field = 'parent_id'

    def for_resource(self, resource_id):
        return self.model.objects.filter(**{self.parent_field: resource_id})

    def count_since(self, resource_id, since: datetime) -> int:
        return self.for_resource(resource_id).filter(created_at__gt=since).count()

    def most_recent(self, resource_id) -> Optional[SubmissionRecord]:
        last = self.for_resource(resource_id).order_by('-created_at', '-pk').first()
        if last is None:
            return None
        return SubmissionRecord(resource_id=resource_id, created_at=last.created_at)


class LimiterStateRepository(BaseRepository, StateStore):
    """
    State store writing straight to the form's ``rate_limit_reached_on`` column.

    trip() and clear() are single conditional UPDATEs, so two requests racing
    on the same form see exactly one of them win.
    """

    model_label = 'userforms.UserDefinedForm'
    field_name = 'rate_limit_reached_on'

    def load(self, resource_id) -> LimiterState:
        tripped_at = (
            self.model.objects
            .filter(pk=resource_id)
            .values_list(self.field_name, flat=True)
            .get()
        )
        return LimiterState(tripped_at=tripped_at)

    def save(self, resource_id, state: LimiterState) -> None:
        self.model.objects.filter(pk=resource_id).update(**{self.field_name: state.tripped_at})

    def trip(self, resource_id, tripped_at: datetime) -> bool:
        updated = (
            self.model.objects
            .filter(pk=resource_id, **{f'{self.field_name}__isnull': True})
            .update(**{self.field_name: tripped_at})
        )
        return updated == 1

    def clear(self, resource_id) -> bool:
        updated = (
            self.model.objects
            .filter(pk=resource_id, **{f'{self.field_name}__isnull': False})
            .update(**{self.field_name: None})
        )
        return updated == 1
