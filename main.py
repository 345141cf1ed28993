import time
import cv2

from landmark_core.config import load_config
from coaching.feedback import FeedbackManager
from coaching.logging_utils import EventLogger
from coaching.session import InterviewSession

WINDOW_NAME = "Interview Coach"


def main():
    config = load_config()
    logger = EventLogger(config)
    feedback = FeedbackManager(config)
    session = InterviewSession(config, logger=logger)

    def display(frame, result):
        feedback.draw_landmarks(frame, result.snapshot)
        feedback.draw_hud(frame, result.messages)

        alert_evt = feedback.maybe_alert(result.messages, now=time.time())
        if alert_evt:
            logger.log_event("ALERT_FIRED", "|".join(alert_evt["messages"]), alert_evt)

        cv2.imshow(WINDOW_NAME, frame)
        key = cv2.waitKey(1) & 0xFF
        if key == ord("q"):
            logger.log_event("KEYPRESS", "q_quit")
            return False
        return True

    try:
        session.start()
        session.run(display)
    finally:
        session.stop()
        feedback.close()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
