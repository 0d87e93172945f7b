"""
Pose estimation backends.

Each backend takes a BGR camera frame and returns the (17, 3) keypoint array
described in keypoints.py (x, y in frame pixels, confidence), or None when no
person was found. Model loading happens in the constructor so that a missing
model or a broken runtime fails at startup, not inside the inference loop.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

import cv2 as cv
import mediapipe as mp
import numpy as np
import onnxruntime as ort

from posemario.config import PoseConfig
from posemario.detection.keypoints import NUM_KEYPOINTS, validate_keypoints

logger = logging.getLogger(__name__)


class PoseSource(ABC):
    """
    Base class for pose backends.
    """

    name = "pose"

    @abstractmethod
    def estimate(self, frame: np.ndarray) -> Optional[np.ndarray]:
        """
        Estimate body keypoints on a BGR frame.

        Returns:
            numpy.ndarray or None: (17, 3) array of x, y (pixels) and confidence
        """
        pass

    def close(self) -> None:
        """Release model resources."""
        pass


class MoveNetPoseSource(PoseSource):
    """
    MoveNet single-pose model run through onnxruntime.

    The model takes a square RGB image and outputs [1, 1, 17, 3] rows of
    (y, x, score) normalized to the input image.
    """

    name = "movenet"

    def __init__(self, model_path=None, input_size=None, providers=None):
        """
        Load the ONNX model.

        Args:
            model_path (str): Path to the .onnx file. If None, uses config default.
            input_size (int): Model input side length. If None, uses config default.
            providers (list): onnxruntime execution providers. Defaults to the available ones.

        Raises:
            RuntimeError: If the model file is missing or the session cannot be created
        """
        self.model_path = model_path if model_path is not None else PoseConfig.MODEL_PATH
        self.input_size = input_size if input_size is not None else PoseConfig.INPUT_SIZE

        if not os.path.isfile(self.model_path):
            raise RuntimeError(f"MoveNet model not found at {self.model_path}")

        if providers is None:
            providers = ort.get_available_providers()

        options = ort.SessionOptions()
        options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        try:
            self.session = ort.InferenceSession(self.model_path, sess_options=options, providers=providers)
        except Exception as e:
            raise RuntimeError(f"Failed to create inference session for {self.model_path}: {e}") from e

        model_input = self.session.get_inputs()[0]
        self.input_name = model_input.name
        self.input_dtype = np.float32 if 'float' in model_input.type else np.int32
        logger.info(f"Loaded MoveNet model {self.model_path} "
                    f"(input {model_input.name} {model_input.type}, providers {self.session.get_providers()})")

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """
        Resize a BGR frame into the model's input tensor.
        """
        resized = cv.resize(frame, (self.input_size, self.input_size), interpolation=cv.INTER_LINEAR)
        rgb = cv.cvtColor(resized, cv.COLOR_BGR2RGB)
        return rgb[np.newaxis, ...].astype(self.input_dtype)

    def estimate(self, frame: np.ndarray) -> Optional[np.ndarray]:
        h, w = frame.shape[:2]
        outputs = self.session.run(None, {self.input_name: self.preprocess(frame)})
        raw = np.asarray(outputs[0], dtype=np.float32).reshape(NUM_KEYPOINTS, 3)

        keypoints = np.empty_like(raw)
        keypoints[:, 0] = raw[:, 1] * w
        keypoints[:, 1] = raw[:, 0] * h
        keypoints[:, 2] = raw[:, 2]
        return keypoints


class MediaPipePoseSource(PoseSource):
    """
    MediaPipe Pose, with its 33 landmarks mapped onto the 17 COCO joints.
    Landmark visibility is used as the joint confidence.
    """

    name = "mediapipe"

    def __init__(self, model_complexity=None, min_detection_confidence=None, min_tracking_confidence=None):
        self.mp_pose = mp.solutions.pose
        landmark = self.mp_pose.PoseLandmark
        self.landmark_ids = [
            landmark.NOSE,
            landmark.LEFT_EYE, landmark.RIGHT_EYE,
            landmark.LEFT_EAR, landmark.RIGHT_EAR,
            landmark.LEFT_SHOULDER, landmark.RIGHT_SHOULDER,
            landmark.LEFT_ELBOW, landmark.RIGHT_ELBOW,
            landmark.LEFT_WRIST, landmark.RIGHT_WRIST,
            landmark.LEFT_HIP, landmark.RIGHT_HIP,
            landmark.LEFT_KNEE, landmark.RIGHT_KNEE,
            landmark.LEFT_ANKLE, landmark.RIGHT_ANKLE,
        ]
        self.pose = self.mp_pose.Pose(
            model_complexity=(model_complexity if model_complexity is not None
                              else PoseConfig.MP_MODEL_COMPLEXITY),
            min_detection_confidence=(min_detection_confidence if min_detection_confidence is not None
                                      else PoseConfig.MP_MIN_DETECTION_CONFIDENCE),
            min_tracking_confidence=(min_tracking_confidence if min_tracking_confidence is not None
                                     else PoseConfig.MP_MIN_TRACKING_CONFIDENCE),
        )
        logger.info("Initialized MediaPipe Pose")

    def estimate(self, frame: np.ndarray) -> Optional[np.ndarray]:
        h, w = frame.shape[:2]
        results = self.pose.process(cv.cvtColor(frame, cv.COLOR_BGR2RGB))
        if results.pose_landmarks is None:
            return None

        landmarks = results.pose_landmarks.landmark
        keypoints = np.array(
            [[landmarks[i].x * w, landmarks[i].y * h, landmarks[i].visibility] for i in self.landmark_ids],
            dtype=np.float32,
        )
        return validate_keypoints(keypoints)

    def close(self) -> None:
        self.pose.close()


def create_pose_source(backend=None) -> PoseSource:
    """
    Build the configured pose backend.

    Args:
        backend (str): 'movenet' or 'mediapipe'. If None, uses config default.

    Raises:
        ValueError: If the backend name is unknown
        RuntimeError: If the backend fails to initialize
    """
    backend = backend if backend is not None else PoseConfig.BACKEND
    if backend == MoveNetPoseSource.name:
        return MoveNetPoseSource()
    if backend == MediaPipePoseSource.name:
        return MediaPipePoseSource()
    raise ValueError(f"Unsupported pose backend: {backend}")
