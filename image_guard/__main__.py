from image_guard.main import main

raise SystemExit(main())
