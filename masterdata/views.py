import logging

from rest_framework import generics, filters, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from users.permissions import IsManagerOrReadOnly
from .serializers import COLLECTIONS

logger = logging.getLogger(__name__)

class CollectionMixin:
    """
    Resolve the master-data collection named in the URL
    """
    permission_classes = [IsManagerOrReadOnly]

    def get_collection(self):
        name = self.kwargs.get('collection')
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise NotFound(f"Unknown master-data collection: {name}")

    def get_serializer_class(self):
        return self.get_collection()[1]

    def get_queryset(self):
        model = self.get_collection()[0]
        queryset = model.objects.all()

        active = self.request.query_params.get('active')
        if active is not None:
            queryset = queryset.filter(active=active.lower() in ('1', 'true', 'yes'))

        return queryset.order_by('name')

class EntityListView(CollectionMixin, generics.ListCreateAPIView):
    """
    List a master-data collection ordered by name, or add an entity
    """
    filter_backends = [filters.SearchFilter]
    search_fields = ['name', 'country']

    def perform_create(self, serializer):
        entity = serializer.save()
        logger.info(
            "Created %s %s (%s)",
            self.kwargs['collection'], entity.pk, entity.name
        )

class EntityDetailView(CollectionMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, update or delete a master-data entity
    """

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        entity_id = instance.pk

        # Hard delete; shipments and quotes keep their own snapshots
        instance.delete()
        logger.info("Deleted %s %s", self.kwargs['collection'], entity_id)

        return Response({
            'message': 'Entity deleted successfully',
            'id': entity_id
        }, status=status.HTTP_200_OK)
