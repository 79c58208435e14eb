"""
Rate Limit ViewSets - operator status and reset endpoints
"""

from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from formguard.apps.userforms.models import UserDefinedForm

from .serializers import RateLimitStatusSerializer
from .services import SubmissionRateLimiter


class FormRateLimitViewSet(viewsets.GenericViewSet):
    """
    Staff-only view of every form's rate limit, with a manual reset.
    """

    permission_classes = [permissions.IsAdminUser]
    serializer_class = RateLimitStatusSerializer
    queryset = UserDefinedForm.objects.all()

    def get_rate_limiter(self):
        return SubmissionRateLimiter()

    def list(self, request):
        limiter = self.get_rate_limiter()
        statuses = [limiter.status(form) for form in self.get_queryset()]

        disabled = request.query_params.get('disabled')
        if disabled is not None:
            wanted = disabled.lower() in ('1', 'true', 'yes')
            statuses = [s for s in statuses if s.disabled == wanted]

        serializer = self.get_serializer(statuses, many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):
        form = self.get_object()
        serializer = self.get_serializer(self.get_rate_limiter().status(form))
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def reset(self, request, pk=None):
        """Re-enable a form regardless of its automatic reset setting"""
        form = self.get_object()
        limiter = self.get_rate_limiter()
        was_reset = limiter.reset(form)
        return Response({
            'reset': was_reset,
            'status': self.get_serializer(limiter.status(form)).data,
        })
