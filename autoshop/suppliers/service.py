from autoshop.utils.crud import CollectionService


class SupplierService(CollectionService):
    collection_name = "suppliers"
    entity = "Supplier"
