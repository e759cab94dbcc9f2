import logging

from rest_framework import generics, filters, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend

from masterdata.snapshots import user_snapshot
from users.permissions import IsManagerOrReadOnly
from . import tracking
from .models import Shipment
from .serializers import ShipmentSerializer, ShipmentListSerializer, TrackingEventSerializer

logger = logging.getLogger(__name__)


def visible_shipments(user):
    """
    Managers see every shipment, customers only their own
    """
    if getattr(user, 'is_manager', False):
        return Shipment.objects.all()
    return Shipment.objects.filter(customer=user)


class ShipmentListView(generics.ListCreateAPIView):
    """
    List shipments or create a new shipment
    """
    permission_classes = [IsManagerOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['status', 'shipment_type', 'active']
    ordering_fields = ['created_at', 'estimated_departure', 'estimated_arrival']

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ShipmentSerializer
        return ShipmentListSerializer

    def get_queryset(self):
        queryset = visible_shipments(self.request.user)

        # Search carrier numbers, BRL reference and shipper name
        search = self.request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(brl_reference__icontains=search) |
                Q(bl_number__icontains=search) |
                Q(awb_number__icontains=search) |
                Q(crt_number__icontains=search) |
                Q(shipper__name__icontains=search) |
                Q(shipper__company__icontains=search)
            )

        return queryset.order_by('-created_at')

    @transaction.atomic
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            shipment = serializer.save(manager=user_snapshot(request.user))
            logger.info(
                "Shipment %s (%s) created by %s",
                shipment.brl_reference, shipment.shipment_type, request.user.username
            )

            return Response(
                ShipmentSerializer(shipment).data,
                status=status.HTTP_201_CREATED
            )

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ShipmentDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, update or delete a shipment
    """
    serializer_class = ShipmentSerializer
    permission_classes = [IsManagerOrReadOnly]

    def get_queryset(self):
        return visible_shipments(self.request.user)

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        if serializer.is_valid():
            self.perform_update(serializer)
            return Response(serializer.data)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        reference = instance.brl_reference
        instance.delete()
        logger.info("Shipment %s deleted by %s", reference, request.user.username)

        return Response({
            'message': 'Shipment deleted successfully',
            'brl_reference': reference
        }, status=status.HTTP_200_OK)


class TrackingEventListView(APIView):
    """
    List the tracking history of a shipment or append a new event
    """
    permission_classes = [IsManagerOrReadOnly]

    def get_shipment(self, request, pk):
        return get_object_or_404(visible_shipments(request.user), pk=pk)

    def get(self, request, pk):
        shipment = self.get_shipment(request, pk)
        return Response(TrackingEventSerializer(shipment.tracking_history, many=True).data)

    @transaction.atomic
    def post(self, request, pk):
        shipment = self.get_shipment(request, pk)

        serializer = TrackingEventSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        event = tracking.record_event(
            shipment,
            serializer.validated_data['status'],
            serializer.validated_data['description'],
            serializer.validated_data.get('location', ''),
        )
        shipment.save()

        return Response({
            'event': event,
            'shipment': ShipmentSerializer(shipment).data
        }, status=status.HTTP_201_CREATED)


class TrackingView(APIView):
    """
    Track a shipment by BL, AWB, CRT number or BRL reference
    """
    permission_classes = [IsManagerOrReadOnly]

    def get(self, request, number):
        number = number.strip().upper()
        shipment = visible_shipments(request.user).filter(
            Q(bl_number=number) |
            Q(awb_number=number) |
            Q(crt_number=number) |
            Q(brl_reference=number)
        ).order_by('-created_at').first()

        if shipment is None:
            raise NotFound(f"No shipment found for {number}")

        last_event = shipment.last_event or {}
        return Response({
            'shipment': ShipmentSerializer(shipment).data,
            'tracking_summary': {
                'total_events': len(shipment.tracking_history),
                'current_status': shipment.status,
                'current_location': last_event.get('location', ''),
                'last_update': last_event.get('timestamp'),
                'estimated_arrival': shipment.estimated_arrival,
                'is_arrived': shipment.status == 'arrived'
            }
        })
