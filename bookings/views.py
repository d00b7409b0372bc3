import logging
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .exceptions import PricingError
from .models import Booking
from .pricing import PricingCalculator
from .serializers import BookingSerializer, RecalculateSerializer

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.ModelViewSet):
    queryset = Booking.objects.all().select_related('user', 'hotel').order_by('-created_at')
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAdminUser] # Staff only, same as the admin site
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = {
        'status': ['exact', 'in'],
        'hotel__id': ['exact'],
        'user__id': ['exact'],
        'check_in_date': ['exact', 'gte', 'lte'],
        'check_out_date': ['exact', 'gte', 'lte'],
    }
    search_fields = ['user__name', 'user__username', 'hotel__name']
    ordering_fields = ['check_in_date', 'check_out_date', 'number_of_rooms', 'total_price', 'status', 'created_at']

    def get_queryset(self):
        if self.action == 'restore':
            # Only soft-deleted bookings can be restored
            return Booking.all_objects.dead().select_related('user', 'hotel')
        return super().get_queryset()

    def perform_destroy(self, instance):
        instance.delete() # Soft delete
        logger.info("Booking %s soft-deleted by %s", instance.pk, self.request.user)

    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        booking = self.get_object()
        booking.restore()
        logger.info("Booking %s restored by %s", booking.pk, request.user)
        return Response(self.get_serializer(booking).data)

    @action(detail=False, methods=['post'])
    def recalculate(self, request):
        """
        Field-change hook for the booking form.
        Body: {"field": ..., "value": ..., "state": {...current form values...}}
        Returns {"updates": {field: new value}} with only the affected fields.
        """
        serializer = RecalculateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        field = serializer.validated_data['field']

        try:
            updates = PricingCalculator().handle_field_change(
                field,
                serializer.validated_data.get('value'),
                serializer.validated_data['state'],
            )
        except PricingError as exc:
            logger.info("Recalculation for %s rejected: %s", field, exc.messages)
            return Response({field: exc.messages}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'updates': updates})
