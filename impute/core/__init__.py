from .context import Context, MissingnessPredicate, is_missing
from .dataset import Dataset, MatrixDataset, SequenceDataset, TableDataset, as_dataset

__all__ = [
    "Context",
    "MissingnessPredicate",
    "is_missing",
    "Dataset",
    "MatrixDataset",
    "SequenceDataset",
    "TableDataset",
    "as_dataset",
]
