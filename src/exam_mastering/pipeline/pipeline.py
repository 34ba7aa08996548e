from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Union
import logging
import json

from lxml import etree

from ..config import Config, MasteringOptions
from ..external.collaborators import (
    FormulaRenderer,
    GenerateUuid,
    GetMediaMetadata,
    GradingStructureBuilder,
    TranslationExtractor,
    random_uuid,
)
from ..external.media_cache import MediaMetadataCache
from ..io.exam_loader import ExamLoader, parse_exam
from ..models import ExamVersion, MasteringResult
from ..preprocess.customizations import StaticTitleCatalog, TitleCatalog, add_exam_code_customizations
from ..preprocess.localization import apply_localizations
from ..preprocess.structure import parse_exam_structure
from ..schema import NS
from ..utils.xml import text_content
from .attachments import add_media_metadata, add_restricted_audio_metadata, collect_attachments, find_attachments
from .cleanup import remove_comments, remove_table_whitespace_nodes, serialize_exam
from .formulas import render_formulas
from .grading import build_grading_structure
from .ids import IdGenerator, add_answer_option_ids, add_question_ids
from .numbering import add_display_numbers
from .redaction import redact
from .scores import count_max_scores, count_section_max_and_min_answers, update_max_scores_to_answers
from .shuffler import shuffle_answer_options
from .translation import extract_translation
from .versions import add_exam_metadata, list_exam_versions

logger = logging.getLogger(__name__)

ExamSource = Union[str, bytes]


class MasteringPipeline:
    """
    High-level orchestrator.

    Masters every exam version declared in an exam document:
    - validate the document once
    - per version: parse a fresh tree, stamp metadata and ids, localize,
      number, shuffle, score, build grading data, redact, collect
      attachments, render formulas and add media metadata
    - media lookups are shared by all versions through one cache

    The first failing version aborts the whole batch.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        generate_uuid: GenerateUuid = random_uuid,
        get_media_metadata: Optional[GetMediaMetadata] = None,
        formula_renderer: Optional[FormulaRenderer] = None,
        grading_structure_builder: GradingStructureBuilder = build_grading_structure,
        translation_extractor: TranslationExtractor = extract_translation,
        title_catalog: Optional[TitleCatalog] = None,
    ):
        self.config = config or Config()
        self.options: MasteringOptions = self.config.mastering

        self.generate_uuid = generate_uuid
        self.get_media_metadata = get_media_metadata
        self.formula_renderer = formula_renderer
        self.grading_structure_builder = grading_structure_builder
        self.translation_extractor = translation_extractor
        self.title_catalog = title_catalog or StaticTitleCatalog()

        self.loader = ExamLoader(
            schema_path=self.config.pipeline.schema_path,
            exam_codes_requiring_day_code=self.config.pipeline.exam_codes_requiring_day_code,
        )

    def master(self, xml: ExamSource) -> List[MasteringResult]:
        """
        Master all versions of an exam.

        Args:
            xml: Exam XML source

        Returns:
            One result per declared version, in declaration order

        Raises:
            ExamValidationError: If the document is invalid (before any version is mastered)
            ExamError: If mastering a version fails
        """
        doc = self.loader.load(xml)
        versions = list_exam_versions(doc.getroot())
        if not versions:
            logger.warning("Exam declares no exam versions, nothing to master")
            return []

        media_metadata = MediaMetadataCache(self.get_media_metadata) if self.get_media_metadata else None

        logger.info(f"Mastering {len(versions)} exam versions")

        if self.config.pipeline.parallel_versions and len(versions) > 1:
            with ThreadPoolExecutor(max_workers=self.config.pipeline.max_workers) as executor:
                results = list(
                    executor.map(lambda version: self.master_version(xml, version, media_metadata), versions)
                )
        else:
            results = [self.master_version(xml, version, media_metadata) for version in versions]

        if media_metadata is not None:
            logger.info(f"Probed {media_metadata.probes} media files")

        return results

    def master_version(
        self,
        xml: ExamSource,
        version: ExamVersion,
        media_metadata: Optional[GetMediaMetadata] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> MasteringResult:
        """
        Master a single exam version from an already validated document.

        Args:
            xml: Exam XML source
            version: The (language, type) to master
            media_metadata: Media lookup; defaults to the pipeline's collaborator
            id_generator: Id generator for this version; a fresh one by default

        Returns:
            MasteringResult of the version
        """
        language, exam_type = version.language, version.type
        logger.info(f"Mastering version {language}/{exam_type}")

        options = self.options
        generate_id = id_generator or IdGenerator()
        if media_metadata is None:
            media_metadata = self.get_media_metadata

        doc = parse_exam(xml)
        root = doc.getroot()

        translation = self.translation_extractor(root)
        exam_uuid = add_exam_metadata(root, self.generate_uuid, language, exam_type)
        add_question_ids(root, generate_id)
        apply_localizations(root, language, exam_type)

        exam = parse_exam_structure(root)
        add_exam_code_customizations(root, language, exam_type, self.title_catalog)
        add_display_numbers(exam)

        if options.multi_choice_shuffle_secret:
            shuffle_answer_options(exam, options.multi_choice_shuffle_secret)

        add_answer_option_ids(exam, generate_id)
        update_max_scores_to_answers(exam)
        count_section_max_and_min_answers(exam)

        grading_structure = self.grading_structure_builder(
            exam, generate_id, group_choice_answers=options.group_choice_answers
        )
        count_max_scores(exam)

        remove_comments(root)
        remove_table_whitespace_nodes(root)

        if options.remove_correct_answers:
            redact(exam)

        attachments = find_attachments(root)
        add_restricted_audio_metadata(attachments)
        render_formulas(root, self.formula_renderer, options.throw_on_latex_error)

        if media_metadata is not None:
            add_media_metadata(attachments, media_metadata)
        elif attachments:
            logger.warning("No media metadata provider configured, skipping media metadata")

        result = MasteringResult(
            attachments=collect_attachments(root, attachments),
            date=root.get("date"),
            day_code=root.get("day-code"),
            exam_code=root.get("exam-code"),
            exam_uuid=exam_uuid,
            grading_structure=grading_structure,
            translation=translation,
            language=language,
            title=_title(root),
            type=exam_type,
            xml=serialize_exam(root),
        )

        logger.info(
            f"Mastered version {language}/{exam_type}: "
            f"{len(exam.answers)} answers, {len(result.attachments)} attachments"
        )
        return result

    def process(
        self,
        exam_path: Path,
        output_path: Optional[Path] = None
    ) -> List[MasteringResult]:
        """Master an exam file, optionally writing the results as JSON."""
        exam_path = Path(exam_path)
        if not exam_path.exists():
            raise FileNotFoundError(f"Exam file not found: {exam_path}")

        results = self.master(exam_path.read_bytes())

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                json.dumps([r.to_json_dict() for r in results], indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            logger.info(f"Wrote {len(results)} results to {output_path}")

        return results

    def run(self, exam_path: str) -> List[MasteringResult]:
        return self.process(Path(exam_path))


def _title(root: etree._Element) -> Optional[str]:
    title = root.find(".//e:exam-title", NS)
    return text_content(title).strip() if title is not None else None


def master_exam(
    xml: ExamSource,
    generate_uuid: GenerateUuid,
    get_media_metadata: GetMediaMetadata,
    options: Optional[MasteringOptions] = None,
    **kwargs,
) -> List[MasteringResult]:
    """
    Master all versions of an exam with the given collaborators.

    Extra keyword arguments (formula_renderer, title_catalog, ...) are
    passed to MasteringPipeline.
    """
    config = Config(mastering=options or MasteringOptions())
    pipeline = MasteringPipeline(
        config=config,
        generate_uuid=generate_uuid,
        get_media_metadata=get_media_metadata,
        **kwargs,
    )
    return pipeline.master(xml)
