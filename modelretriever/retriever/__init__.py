"""
Model retriever: cached longest-path lookup of validation models.
"""

from .model_retriever import ModelRetriever, ModelMerger

__all__ = ['ModelRetriever', 'ModelMerger']
