from django.contrib import messages
from django.http import HttpResponseRedirect
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.permissions.decorators import require_permission
from profile_project.response_formatter import success_response
from profiles.serializers import DeleteConfirmSerializer
from profiles.services.delete_multiple_service import (
    CONFIRM_ROUTE,
    OVERVIEW_ROUTE,
    DeleteMultipleWorkflow,
    ProfileDeletionError,
    temp_store_for,
)
from profiles.services.profile_service import ProfileStorage


def _workflow(request):
    return DeleteMultipleWorkflow(
        temp_store_for(request.user.pk),
        ProfileStorage(),
        notify=lambda message: messages.success(request, message)
    )


@api_view(['GET', 'POST'])
@require_permission('administer profiles')
def profile_multiple_delete_confirm(request):
    """
    Confirmation page for profiles staged on the overview.

    GET  - the prompt, or a redirect to the overview when nothing is staged
    POST - confirm=true deletes the staged profiles; always redirects to the overview
    """
    workflow = _workflow(request)
    user_id = request.user.pk

    if request.method == 'GET':
        confirmation = workflow.build_confirmation(user_id)
        if confirmation is None:
            return HttpResponseRedirect(reverse(OVERVIEW_ROUTE))

        data = confirmation.as_dict()
        data['cancel_url'] = reverse(confirmation.cancel_route)
        data['confirm_url'] = reverse(CONFIRM_ROUTE)
        return success_response(data=data, message=confirmation.question)

    serializer = DeleteConfirmSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        outcome = workflow.submit(user_id, serializer.validated_data['confirm'])
    except ProfileDeletionError as e:
        messages.error(request, str(e))
        return HttpResponseRedirect(reverse(CONFIRM_ROUTE))

    return HttpResponseRedirect(reverse(outcome.redirect_route))
