import asyncio
import logging
from typing import List, Optional

from fastapi import UploadFile

from config import settings
from core.domain import AnalysisResult, UploadedFile
from core.enums import ErrorCode, ProcessingMode
from core.exceptions import AnalysisError, TransportError, UploadAdmissionError
from core.interfaces import IDocumentAnalysisService, IExtractionClient, IFileStorage
from services.analysis_merger import merge_results
from services.chunking import chunk_text, estimate_tokens
from services.text_extractor_factory import TextExtractorFactory

logger = logging.getLogger(settings.LOGGER_NAME)


class DocumentAnalysisService(IDocumentAnalysisService):
    """
    Runs uploaded documents through text extraction, optional chunking and
    model extraction, then merges everything into one analysis.

    Files in a batch are processed concurrently. Chunks of one file are
    processed strictly in order, the first as a full extraction and the rest
    as continuations.
    """

    def __init__(
        self,
        extraction_client: IExtractionClient,
        file_storage: IFileStorage,
        extractor_factory: Optional[TextExtractorFactory] = None,
        *,
        max_single_pass_tokens: int = settings.MAX_SINGLE_PASS_TOKENS,
        chunk_size: int = settings.CHUNK_SIZE,
        chars_per_token: int = settings.CHARS_PER_TOKEN,
        max_file_size: int = settings.MAX_FILE_SIZE,
    ):
        self.extraction_client = extraction_client
        self.file_storage = file_storage
        self.extractor_factory = extractor_factory or TextExtractorFactory()
        self.max_single_pass_tokens = max_single_pass_tokens
        self.chunk_size = chunk_size
        self.chars_per_token = chars_per_token
        self.max_file_size = max_file_size

    # ---------- Per file ----------

    def select_mode(self, text: str) -> ProcessingMode:
        if estimate_tokens(text, self.chars_per_token) > self.max_single_pass_tokens:
            return ProcessingMode.CHUNKED
        return ProcessingMode.SINGLE_PASS

    async def _process_chunked(self, file: UploadedFile, text: str) -> AnalysisResult:
        chunks = chunk_text(text, self.chunk_size)
        logger.info(f"Split '{file.original_name}' into {len(chunks)} chunks")

        chunk_results: List[AnalysisResult] = []
        for chunk in chunks:
            logger.info(
                f"Processing chunk {chunk.index + 1}/{len(chunks)} "
                f"({len(chunk.content)} chars) of '{file.original_name}'"
            )
            try:
                result = await self.extraction_client.extract(
                    chunk.content, is_first_segment=chunk.index == 0
                )
            except Exception as e:
                # One bad chunk only loses its own contribution
                logger.warning(f"Skipping chunk {chunk.index + 1} of '{file.original_name}': {e}")
                continue
            chunk_results.append(result)

        if not chunk_results:
            logger.warning(f"No chunk of '{file.original_name}' could be extracted")
        return merge_results(chunk_results)

    async def process_file(self, file: UploadedFile) -> AnalysisResult:
        try:
            text = await self.extractor_factory.extract_text(file)
            logger.info(f"Extracted {len(text)} characters from {file.original_name}")

            mode = self.select_mode(text)
            if mode is ProcessingMode.CHUNKED:
                logger.info(
                    f"Document is large ({estimate_tokens(text, self.chars_per_token)} tokens), "
                    f"splitting into chunks..."
                )
                return await self._process_chunked(file, text)
            return await self.extraction_client.extract(text, is_first_segment=True)

        except AnalysisError as e:
            logger.error(f"Error processing file {file.original_name}: {e.log_format()}")
            return AnalysisResult.failed(file.original_name, e.message)
        except Exception as e:
            logger.error(f"Unexpected error processing file {file.original_name}: {e}", exc_info=True)
            return AnalysisResult.failed(file.original_name, str(e))
        finally:
            await self.file_storage.delete(file.path)

    # ---------- Batch ----------

    async def _admit(self, uploads: List[UploadFile]) -> List[UploadedFile]:
        """Store every part or none of them."""
        uploads = [u for u in uploads if u is not None and u.filename]
        if not uploads:
            raise UploadAdmissionError(
                "No files uploaded",
                details="Send one or more files in the 'files' or 'documents' form field",
                error_code=ErrorCode.NO_FILES,
            )

        stored: List[UploadedFile] = []
        try:
            for upload in uploads:
                stored.append(await self.file_storage.save(upload, self.max_file_size))
        except (UploadAdmissionError, OSError) as e:
            for f in stored:
                await self.file_storage.delete(f.path)
            if isinstance(e, OSError):
                raise TransportError(f"Could not store upload: {e}") from e
            raise
        return stored

    async def analyze_uploads(self, uploads: List[UploadFile]) -> AnalysisResult:
        stored = await self._admit(uploads)
        logger.info(f"Analyzing batch of {len(stored)} file(s): {[f.original_name for f in stored]}")

        results = await asyncio.gather(*(self.process_file(f) for f in stored))

        combined = merge_results(list(results))
        if combined.errors:
            logger.warning(f"{len(combined.errors)} of {len(stored)} file(s) failed")
        return combined
