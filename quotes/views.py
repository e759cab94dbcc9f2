import logging

from rest_framework import generics, filters, status
from rest_framework.response import Response
from rest_framework.views import APIView
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend

from masterdata.snapshots import user_snapshot
from users.permissions import IsManager
from . import catalog, workflow
from .costs import CostLineRegistry
from .models import Quote
from .serializers import (
    QuoteSerializer, QuoteListSerializer,
    AddCostLineSerializer, TotalsPreviewSerializer
)

logger = logging.getLogger(__name__)

class QuoteListView(generics.ListCreateAPIView):
    """
    List all quotes or create a new draft quote
    """
    permission_classes = [IsManager]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['quote_type', 'currency']
    ordering_fields = ['created_at', 'valid_until', 'total']

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return QuoteSerializer
        return QuoteListSerializer

    def get_queryset(self):
        queryset = Quote.objects.all()

        # 'expired' is derived from valid_until, not stored
        status_filter = self.request.query_params.get('status')
        now = timezone.now()
        if status_filter == 'expired':
            queryset = queryset.filter(status='sent', valid_until__lt=now)
        elif status_filter == 'sent':
            queryset = queryset.filter(status='sent').filter(
                Q(valid_until__isnull=True) | Q(valid_until__gte=now)
            )
        elif status_filter:
            queryset = queryset.filter(status=status_filter)

        # Search reference and party companies
        search = self.request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(reference__icontains=search) |
                Q(shipper__company__icontains=search) |
                Q(consignee__company__icontains=search)
            )

        return queryset.order_by('-created_at')

    @transaction.atomic
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            quote = serializer.save(
                status='draft',
                created_by=user_snapshot(request.user)
            )
            logger.info("Quote %s created by %s", quote.reference, request.user.username)

            return Response(
                QuoteSerializer(quote).data,
                status=status.HTTP_201_CREATED
            )

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

class QuoteDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, edit (drafts only) or delete a quote
    """
    serializer_class = QuoteSerializer
    permission_classes = [IsManager]
    queryset = Quote.objects.all()

    @transaction.atomic
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        # Only drafts can change content
        workflow.ensure_editable(instance)

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        if serializer.is_valid():
            self.perform_update(serializer)
            return Response(serializer.data)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        reference = instance.reference
        instance.delete()
        logger.info("Quote %s deleted by %s", reference, request.user.username)

        return Response({
            'message': 'Quote deleted successfully',
            'reference': reference
        }, status=status.HTTP_200_OK)

class QuoteActionView(APIView):
    """
    Send, accept or reject a quote
    """
    permission_classes = [IsManager]
    workflow_action = None

    @transaction.atomic
    def post(self, request, pk):
        quote = get_object_or_404(Quote, pk=pk)
        previous_status = quote.status

        workflow.apply_action(quote, self.workflow_action)
        quote.save()

        return Response({
            'message': f'Quote {quote.status} successfully',
            'reference': quote.reference,
            'previous_status': previous_status,
            'new_status': quote.status,
            'quote': QuoteSerializer(quote).data
        })

class QuoteCostLineView(APIView):
    """
    Add a cost line to a draft quote, optionally from a charge preset
    """
    permission_classes = [IsManager]

    @transaction.atomic
    def post(self, request, pk):
        quote = get_object_or_404(Quote, pk=pk)
        workflow.ensure_editable(quote)

        serializer = AddCostLineSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        registry = CostLineRegistry.from_documents(quote.costs)
        line = registry.add_line(
            serializer.validated_data['category'],
            serializer.validated_data.get('preset') or None
        )
        workflow.edit(quote, {'costs': registry.to_documents()})
        quote.save()

        return Response({
            'index': len(registry.lines) - 1,
            'line': line.to_dict(),
            'quote': QuoteSerializer(quote).data
        }, status=status.HTTP_201_CREATED)

class QuoteCostLineDeleteView(APIView):
    """
    Remove the cost line at a position from a draft quote
    """
    permission_classes = [IsManager]

    @transaction.atomic
    def delete(self, request, pk, index):
        quote = get_object_or_404(Quote, pk=pk)
        workflow.ensure_editable(quote)

        registry = CostLineRegistry.from_documents(quote.costs)
        removed = registry.remove_line(index)
        workflow.edit(quote, {'costs': registry.to_documents()})
        quote.save()

        return Response({
            'message': 'Cost line removed',
            'removed': removed.to_dict(),
            'quote': QuoteSerializer(quote).data
        })

class TotalsPreviewView(APIView):
    """
    Calculate totals for cost lines that are still being edited
    """
    permission_classes = [IsManager]

    def post(self, request):
        serializer = TotalsPreviewSerializer(data=request.data)
        if serializer.is_valid():
            return Response(serializer.calculate())
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

class QuoteCatalogView(APIView):
    """
    Cost categories, charge presets, incoterms and other quote lookups
    """
    permission_classes = [IsManager]

    def get(self, request):
        return Response(catalog.as_dict())
