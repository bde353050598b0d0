# src/signstream/infer.py
import argparse
import logging

import cv2

from .config import CAMERA_INDEX, LABEL_MAP_PATH, MODEL_PATH, PipelineConfig
from .model import default_loaders, load_label_map, resolve_classifier
from .pipeline import GesturePipeline

logger = logging.getLogger(__name__)


def build_pipeline(config=None, model_path=MODEL_PATH, label_map_path=LABEL_MAP_PATH):
    """Bind a classifier through the model-source chain and wrap it in a pipeline."""
    config = config or PipelineConfig()
    labels = load_label_map(label_map_path)
    classifier = resolve_classifier(default_loaders(config, labels, model_path))
    return GesturePipeline(classifier, labels, config)


def run(pipeline, source, show=True, max_frames=None):
    """Drive the pipeline from a landmark source until 'q' or max_frames."""
    pipeline.start()
    frames = 0
    try:
        while max_frames is None or frames < max_frames:
            keypoints = source.next_frame()
            pipeline.process_frame(keypoints)
            frames += 1

            for event in pipeline.drain_events():
                print(f"Gesture: {event.label} ({event.confidence * 100:.1f}%)")

            if show and source.preview is not None:
                label = pipeline.current_label or "-"
                cv2.putText(
                    source.preview,
                    f"{label} {pipeline.confidence:.2f}",
                    (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    1,
                    (0, 255, 0),
                    2,
                )
                cv2.imshow("Gesture Recognition", source.preview)
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
    finally:
        pipeline.stop()
        if show:
            cv2.destroyAllWindows()
    return frames


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Recognize hand gestures from the webcam.")
    parser.add_argument("--model", default=MODEL_PATH, help="Path to saved model weights.")
    parser.add_argument("--labels", default=LABEL_MAP_PATH, help="Path to label_map.json.")
    parser.add_argument("--camera", type=int, default=CAMERA_INDEX, help="Camera index.")
    parser.add_argument("--no-window", action="store_true", help="Do not open a preview window.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    from .camera_live import CameraLandmarkSource

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    pipeline = build_pipeline(model_path=args.model, label_map_path=args.labels)
    print("Press 'q' to quit")
    with CameraLandmarkSource(args.camera) as source:
        run(pipeline, source, show=not args.no_window)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
