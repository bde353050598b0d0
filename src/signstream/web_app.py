import logging
import threading

import cv2
from flask import Flask, Response, jsonify

from .config import PORT

logger = logging.getLogger(__name__)


def create_app(pipeline, source_factory=None):
    """
    Backend-only Flask app around one GesturePipeline.

    ``source_factory`` builds a landmark source for /video_feed; it must return
    an object with open()/is_open()/next_frame()/close() and a ``preview`` BGR
    image. Only one stream feeds the pipeline at a time.
    """
    app = Flask(__name__)
    stop_event = threading.Event()
    stream_lock = threading.Lock()
    streaming = threading.Event()

    def generate_frames():
        with stream_lock:
            if streaming.is_set():
                return
            streaming.set()

        source = None
        try:
            source = source_factory().open()
            while source.is_open() and not stop_event.is_set():
                keypoints = source.next_frame()
                pipeline.process_frame(keypoints)
                if source.preview is None:
                    continue

                # Encode frame for MJPEG streaming
                ok, buffer = cv2.imencode(".jpg", source.preview)
                if not ok:
                    continue
                yield (
                    b"--frame\r\n"
                    b"Content-Type: image/jpeg\r\n\r\n" + buffer.tobytes() + b"\r\n"
                )
        finally:
            if source is not None:
                source.close()
            streaming.clear()

    @app.route("/")
    def index():
        return (
            "Backend is running. POST /start to begin, /video_feed for the MJPEG stream, "
            "/status and /history for results, POST /stop_infer to stop.",
            200,
        )

    @app.route("/start", methods=["POST"])
    def start():
        stop_event.clear()
        pipeline.start()
        return jsonify(running=pipeline.running)

    @app.route("/stop_infer", methods=["POST"])
    def stop_infer():
        stop_event.set()
        pipeline.stop()
        return ("stopped", 200)

    @app.route("/status")
    def status():
        return jsonify(
            running=pipeline.running,
            model_loaded=pipeline.classifier is not None,
            current_label=pipeline.current_label,
            confidence=pipeline.confidence,
        )

    @app.route("/history")
    def history():
        return jsonify(predictions=[event.to_dict() for event in pipeline.history.snapshot()])

    @app.route("/history/clear", methods=["POST"])
    def clear_history():
        pipeline.clear_history()
        return ("cleared", 200)

    @app.route("/video_feed")
    def video_feed():
        if source_factory is None:
            return ("No camera configured", 404)
        if streaming.is_set():
            logger.warning("Refusing a second video stream")
            return ("Stream already active", 409)
        stop_event.clear()
        pipeline.start()
        return Response(
            generate_frames(), mimetype="multipart/x-mixed-replace; boundary=frame"
        )

    return app


def main():
    from .camera_live import CameraLandmarkSource
    from .infer import build_pipeline

    logging.basicConfig(level=logging.INFO)
    app = create_app(build_pipeline(), source_factory=CameraLandmarkSource)
    app.run(host="0.0.0.0", port=PORT, debug=False)


if __name__ == "__main__":
    main()
