from django.db.models import Count
from rest_framework import generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema

from authentication.permissions import IsAdminRole
from .models import Category, Product
from .serializers import CategorySerializer, ProductSerializer, ProductWriteSerializer
from .services import CategoryEditor, ProductEditor


class EditorMixin:
    """Mixin giving each request its own editor service"""
    editor_class = None

    def get_editor(self):
        return self.editor_class()

    def submitted_data(self, serializer):
        """Validated data limited to the fields the client actually sent"""
        # form-encoded requests report missing checkboxes as False
        return {
            field: value for field, value in serializer.validated_data.items()
            if field in self.request.data
        }


# Category Views
class CategoryListCreateView(EditorMixin, generics.ListCreateAPIView):
    """
    get: List all categories by name
    post: Create a new category (multipart requests may carry an `image` file)
    """
    queryset = Category.objects.annotate(products_count=Count('products'))
    serializer_class = CategorySerializer
    permission_classes = [IsAdminRole]
    editor_class = CategoryEditor
    filterset_fields = ['is_active']
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def perform_create(self, serializer):
        serializer.instance = self.get_editor().create(
            self.submitted_data(serializer),
            image=self.request.FILES.get('image'),
            user=self.request.user,
        )


class CategoryRetrieveUpdateDestroyView(EditorMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get category details
    put/patch: Update category
    delete: Soft delete category (refused while products reference it)
    """
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsAdminRole]
    editor_class = CategoryEditor

    def perform_update(self, serializer):
        serializer.instance = self.get_editor().update(
            serializer.instance,
            self.submitted_data(serializer),
            image=self.request.FILES.get('image'),
            user=self.request.user,
        )

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        self.get_editor().delete(category, user=request.user)
        return Response({"message": "Category deleted successfully"}, status=status.HTTP_200_OK)


@extend_schema(request=None, responses=CategorySerializer)
@api_view(['POST'])
@permission_classes([IsAdminRole])
def toggle_category_status(request, pk):
    """Flip a category between active and inactive"""
    category = get_object_or_404(Category, pk=pk)
    category = CategoryEditor().toggle_status(category, user=request.user)
    return Response(CategorySerializer(category).data)


# Product Views
class ProductListCreateView(EditorMixin, generics.ListCreateAPIView):
    """
    get: List all products with their category name
    post: Create a new product; `category` is a category name, created when missing
    """
    queryset = Product.objects.select_related('category')
    permission_classes = [IsAdminRole]
    editor_class = ProductEditor
    filterset_fields = ['is_available', 'category']
    search_fields = ['name', 'description', 'category__name']
    ordering_fields = ['name', 'price', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ProductWriteSerializer
        return ProductSerializer

    @extend_schema(request=ProductWriteSerializer, responses={201: ProductSerializer})
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = self.get_editor().create(serializer.validated_data, user=request.user)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductRetrieveUpdateDestroyView(EditorMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get product details
    put/patch: Update product
    delete: Delete product permanently
    """
    queryset = Product.objects.select_related('category')
    permission_classes = [IsAdminRole]
    editor_class = ProductEditor

    def get_serializer_class(self):
        if self.request.method in ['PUT', 'PATCH']:
            return ProductWriteSerializer
        return ProductSerializer

    @extend_schema(request=ProductWriteSerializer, responses=ProductSerializer)
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = self.get_editor().update(product, serializer.validated_data, user=request.user)
        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        self.get_editor().delete(product)
        return Response({"message": "Product deleted successfully"}, status=status.HTTP_200_OK)
