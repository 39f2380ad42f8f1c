from cpsparse.demo import main

raise SystemExit(main())
