"""
User Defined Form ViewSets - visitor facing form pages
"""

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .forms import UserForm
from .models import SubmittedForm, UserDefinedForm
from .serializers import (
    SubmittedFormSerializer,
    UserDefinedFormSerializer,
    UserDefinedFormSummarySerializer,
)
from .signals import form_page_requested, form_submission_processed


class UserDefinedFormViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Serves published form pages and accepts their submissions.

    Every page request (GET or POST) first sends form_page_requested so other
    apps can update the page before its form is built.
    """

    permission_classes = [permissions.AllowAny]

    def get_queryset(self):
        user = self.request.user
        if user and user.is_staff:
            return UserDefinedForm.objects.all()
        return UserDefinedForm.objects.published()

    def get_serializer_class(self):
        if self.action == 'list':
            return UserDefinedFormSummarySerializer
        return UserDefinedFormSerializer

    def get_page(self):
        page = self.get_object()
        form_page_requested.send(sender=UserDefinedForm, form=page, request=self.request)
        return page

    def retrieve(self, request, *args, **kwargs):
        page = self.get_page()
        serializer = self.get_serializer(page, context={
            **self.get_serializer_context(),
            'user_form': UserForm(page),
        })
        return Response(serializer.data)

    @action(detail=True, methods=['post'], permission_classes=[permissions.AllowAny])
    def submit(self, request, pk=None):
        """Validate and store a visitor submission"""
        page = self.get_page()
        user_form = UserForm(page, data=request.data)

        if not user_form.accepts_submissions:
            return Response(
                {
                    'detail': 'This form is not accepting submissions.',
                    'form': user_form.schema(),
                },
                status=status.HTTP_403_FORBIDDEN
            )

        if not user_form.is_valid():
            return Response({'errors': user_form.errors}, status=status.HTTP_400_BAD_REQUEST)

        submission = SubmittedForm.objects.create(
            parent=page,
            data=user_form.get_submission_data(),
            submitted_by=request.user if request.user.is_authenticated else None,
        )
        form_submission_processed.send(sender=SubmittedForm, form=page, submission=submission)

        return Response(
            {
                'submission': SubmittedFormSerializer(submission).data,
                'message': page.on_complete_message,
            },
            status=status.HTTP_201_CREATED
        )
