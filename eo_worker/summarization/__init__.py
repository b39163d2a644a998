from eo_worker.summarization.beneficiary import infer_primary_beneficiary
from eo_worker.summarization.factory import SummarizerFactory
from eo_worker.summarization.summarizer import Summarizer

__all__ = ["Summarizer", "SummarizerFactory", "infer_primary_beneficiary"]
