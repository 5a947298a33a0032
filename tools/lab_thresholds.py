import cv2
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from handtree.config import CONFIG
from handtree.core.errors import HandTreeError, TransientFrameFault
from handtree.core.stabilizer import PoseStabilizer, PoseFilterState
from handtree.gesture_engine import PoseClassifier
from handtree.hand_utils import select_main_hand
from handtree.vision.landmark_source import MediaPipeLandmarkSource

WINDOW = "Threshold Lab"

def run_lab():
    print("🖐️ THRESHOLD LAB (Classifier + Debounce)")
    print("   -> Tune T_EXTENDED / T_CURLED / T_PINCH and the confirm window K.")
    print("   -> RAW = per-frame pose | STABLE = debounced pose")
    print("   -> 'S' prints the values, 'ESC' quits")

    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW, 1000, 700)

    def nothing(x): pass

    # Sliders (ratios x100)
    cv2.createTrackbar("T_EXTENDED (%)", WINDOW, int(CONFIG["T_EXTENDED"]*100), 150, nothing)
    cv2.createTrackbar("T_CURLED (%)", WINDOW, int(CONFIG["T_CURLED"]*100), 150, nothing)
    cv2.createTrackbar("T_PINCH (%)", WINDOW, int(CONFIG["T_PINCH"]*100), 100, nothing)
    cv2.createTrackbar("K (frames)", WINDOW, CONFIG["CONFIRM_WINDOW"], 6, nothing)

    try:
        source = MediaPipeLandmarkSource()
    except HandTreeError as e:
        print(f"❌ {e}")
        return

    pose_filter = PoseFilterState()

    while True:
        # Live Updates (never let a ratio hit zero)
        t_ext = max(cv2.getTrackbarPos("T_EXTENDED (%)", WINDOW), 1) / 100.0
        t_curl = max(cv2.getTrackbarPos("T_CURLED (%)", WINDOW), 1) / 100.0
        t_pinch = max(cv2.getTrackbarPos("T_PINCH (%)", WINDOW), 1) / 100.0
        k_val = max(cv2.getTrackbarPos("K (frames)", WINDOW), 1)

        classifier = PoseClassifier(t_extended=t_ext, t_curled=t_curl, t_pinch=t_pinch)
        stabilizer = PoseStabilizer(confirm_window=k_val)

        try:
            hand = select_main_hand(source.read())
        except TransientFrameFault:
            hand = None

        frame = source.last_frame
        if frame is None:
            if cv2.waitKey(1) == 27: break
            continue
        frame = cv2.flip(frame, 1) if CONFIG["MIRROR_PREVIEW"] else frame.copy()
        h, w, _ = frame.shape

        if hand is None:
            pose_filter = stabilizer.reset()
            raw_label = "NO HAND"
        else:
            raw = classifier.classify(hand)
            pose_filter = stabilizer.update(pose_filter, raw)
            raw_label = raw.value

            extended, curled = classifier.finger_states(hand)
            for i, name in enumerate(["INDEX", "MIDDLE", "RING", "PINKY"]):
                state = "OUT" if extended[i] else "IN" if curled[i] else "--"
                cv2.putText(frame, f"{name}: {state}", (w - 160, 30 + i*25), 1, 1.2, (255,255,255), 1)
            cv2.putText(frame, f"PINCH: {classifier.pinch_distance(hand):.2f}",
                        (w - 160, 30 + 4*25), 1, 1.2, (0,255,255), 1)

        # HUD
        cv2.rectangle(frame, (20, h-120), (400, h-20), (0,0,0), -1)
        cv2.putText(frame, f"RAW: {raw_label}", (30, h-90), 1, 1.5, (200,200,200), 2)
        cv2.putText(frame, f"STABLE: {pose_filter.stable.value}", (30, h-60), 1, 1.5, (0,255,0), 2)
        cv2.putText(frame, f"K: {k_val}  votes: {pose_filter.count}", (30, h-30), 1, 1, (255,255,255), 1)

        cv2.imshow(WINDOW, frame)
        k = cv2.waitKey(1)
        if k == 27: break
        if k == ord('s'):
            print("\n" + "="*40)
            print("💾 CONFIG VALUES (CLASSIFIER):")
            print(f'    "T_EXTENDED": {t_ext:.2f},')
            print(f'    "T_CURLED": {t_curl:.2f},')
            print(f'    "T_PINCH": {t_pinch:.2f},')
            print(f'    "CONFIRM_WINDOW": {k_val},')
            print("="*40 + "\n")

    source.release()
    cv2.destroyAllWindows()

if __name__ == "__main__":
    run_lab()
